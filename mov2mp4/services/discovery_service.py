"""
Discovers the source files of a batch.

Only the immediate entries of the input directory are considered: subdirectories
are never descended into, and only regular files with a '.mov' suffix (in any
letter case) are picked up.
"""

from pathlib import Path
from typing import Iterator, List

from loguru import logger

from ..config.video import SOURCE_EXTENSIONS
from ..domain.exceptions import DiscoveryError
from ..domain.job import ConversionJob
from ..utils.format_utils import contains_any_extensions


def iter_mov_files(input_dir: Path) -> Iterator[Path]:
    """
    Yields the MOV files directly inside `input_dir`, sorted by file name.

    The directory is read once, when the generator is first advanced.

    Raises:
        DiscoveryError: If `input_dir` does not exist, is not a directory or
                        cannot be listed.
    """
    try:
        exists = input_dir.exists()
        is_dir = exists and input_dir.is_dir()
    except OSError as e:
        raise DiscoveryError(f"Cannot access input directory {input_dir}: {e}") from e
    if not exists:
        raise DiscoveryError(f"Input directory does not exist: {input_dir}")
    if not is_dir:
        raise DiscoveryError(f"Input path is not a directory: {input_dir}")

    try:
        entries = sorted(input_dir.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise DiscoveryError(f"Cannot read input directory {input_dir}: {e}") from e

    for entry in entries:
        if not entry.is_file():
            logger.trace(f"Skipping non-file entry: {entry.name}")
            continue
        if not contains_any_extensions(entry, SOURCE_EXTENSIONS):
            logger.trace(f"Skipping non-MOV file: {entry.name}")
            continue
        yield entry


def discover_jobs(input_dir: Path, output_dir: Path) -> List[ConversionJob]:
    """
    Creates one pending ConversionJob per MOV file in `input_dir`.

    Raises:
        DiscoveryError: Propagated from `iter_mov_files`.
    """
    jobs = [ConversionJob(source, output_dir) for source in iter_mov_files(input_dir)]
    logger.debug(f"Discovered {len(jobs)} MOV file(s) in {input_dir}")
    return jobs
