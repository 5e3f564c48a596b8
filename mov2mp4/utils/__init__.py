"""
Utilities Package for mov2mp4.

Modules:
    - ffmpeg_utils.py: Locating FFmpeg and ffprobe, probing durations and
      reading progress tokens from FFmpeg's output.
    - format_utils.py: Helper functions for timecodes, durations and file
      extensions.
"""
