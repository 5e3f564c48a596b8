"""
Command-Line Interface (CLI) setup for mov2mp4.

This module uses Python's `argparse` to define and parse the command-line
arguments that control the application's behavior.
"""
import argparse
from pathlib import Path
from typing import Optional, Sequence

from .config.common import DEFAULT_INPUT_DIR, DEFAULT_OUTPUT_DIR


def get_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parses command-line arguments for mov2mp4.

    Args:
        argv: The arguments to parse. Defaults to `sys.argv[1:]`.

    Returns:
        argparse.Namespace: An object containing the parsed command-line
                            arguments as attributes.
    """
    parser = argparse.ArgumentParser(description="Batch-convert MOV files to MP4 with FFmpeg.")
    parser.add_argument(
        "-d", "--delete", action="store_true",
        help="Delete each original MOV file after it was converted successfully.",
    )
    parser.add_argument(
        "--input-dir", type=Path, default=DEFAULT_INPUT_DIR,
        help=f"Directory containing the MOV files (default: {DEFAULT_INPUT_DIR}).",
    )
    parser.add_argument(
        "--output-dir", type=Path, default=DEFAULT_OUTPUT_DIR,
        help=f"Directory receiving the MP4 files (default: {DEFAULT_OUTPUT_DIR}).",
    )
    parser.add_argument(
        "--log-level", type=str, default=None, choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set the logging level (default: DEBUG unless Python runs with -O, then INFO).",
    )
    return parser.parse_args(argv)
