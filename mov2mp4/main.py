"""
Main entry point for mov2mp4.

Configures logging, parses the command line and runs the batch conversion
pipeline. The process exits with 0 when the batch ran, even if single files
failed, and with 1 only when the input directory could not be read.
"""

import sys
from typing import Optional, Sequence

from loguru import logger
from tqdm import tqdm

from .cli import get_args
from .config.common import LOGGER_FORMAT
from .domain.exceptions import DiscoveryError
from .pipeline.conversion_pipeline import BatchConversionPipeline, default_converter
from .utils.ffmpeg_utils import verify_ffmpeg

EXIT_OK = 0
EXIT_DISCOVERY_ERROR = 1


def configure_logger(level: str = "INFO"):
    """Routes Loguru through `tqdm.write` so log lines do not break the progress bar."""
    logger.remove()
    logger.add(
        lambda message: tqdm.write(message, end="", file=sys.stderr),
        level=level,
        format=LOGGER_FORMAT,
        colorize=sys.stderr.isatty(),
    )


def effective_log_level(requested: Optional[str]) -> str:
    """An explicit level wins; otherwise DEBUG in debug mode and INFO under 'python -O'."""
    if requested:
        return requested
    return "DEBUG" if __debug__ else "INFO"


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = get_args(argv)
    configure_logger(effective_log_level(args.log_level))
    logger.debug(f"Parsed arguments: {args}")

    converter = default_converter()
    verify_ffmpeg(converter.ffmpeg_path)

    pipeline = BatchConversionPipeline(
        input_dir=args.input_dir,
        output_dir=args.output_dir,
        delete_sources=args.delete,
        converter=converter,
    )
    try:
        result = pipeline.run()
    except DiscoveryError as e:
        logger.error(f"Aborting: {e}")
        return EXIT_DISCOVERY_ERROR

    if result.failed:
        logger.warning(f"{len(result.failed)} of {result.total} conversion(s) failed.")
    else:
        logger.success("mov2mp4 finished.")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
