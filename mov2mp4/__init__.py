"""
mov2mp4: batch-convert MOV files to MP4 with FFmpeg.

Subpackages:
    config: Static settings and the optional 'config.user.yaml' overrides.
    domain: ConversionJob, BatchResult and the exception hierarchy.
    services: Discovery, conversion, result aggregation and error logging.
    pipeline: BatchConversionPipeline, which ties the services together.
    utils: FFmpeg helpers and formatting functions.
"""

__version__ = "0.1.0"
