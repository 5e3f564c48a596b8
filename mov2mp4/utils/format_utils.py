"""
This module contains helper functions for formatting data into human-readable strings
and for reading the timecodes FFmpeg prints.
"""

import re
from datetime import timedelta
from pathlib import Path
from typing import Iterable

from loguru import logger

_TIMECODE_PATTERN = re.compile(r"(?:(\d+):)?(\d{1,2}):(\d{1,2}(?:\.\d+)?)")


def format_timedelta(td_object: timedelta) -> str:
    """
    Formats a timedelta object into a "HH:MM:SS" string.

    Args:
        td_object: The timedelta object to format.

    Returns:
        A string representing the timedelta in HH:MM:SS format.
        For example, a timedelta of 7261 seconds becomes "02:01:01".
        Returns "00:00:00" if the input is not a valid timedelta object.
    """
    if not isinstance(td_object, timedelta):
        return "00:00:00"

    total_seconds = int(td_object.total_seconds())
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02}:{minutes:02}:{seconds:02}"


def timecode_to_seconds(timecode: str) -> float:
    """
    Parses a duration string into total seconds.

    Handles both a plain number of seconds ("3600.5") and a timecode in the form
    'HH:MM:SS.sss' ("01:00:00.500"). Hours are optional in the timecode form.

    Returns:
        The total duration in seconds. Returns 0.0 if parsing fails.
    """
    try:
        return float(timecode)
    except ValueError:
        match = _TIMECODE_PATTERN.fullmatch(timecode.strip())
        if match:
            hours_str, minutes_str, seconds_str = match.groups()
            hours = int(hours_str) if hours_str else 0
            return float(hours * 3600 + int(minutes_str) * 60 + float(seconds_str))
        logger.debug(f"Could not parse timecode: {timecode}")
    return 0.0


def contains_any_extensions(file_path_obj: Path, extensions_to_check: Iterable[str]) -> bool:
    """
    Checks if a file's extension is present in a given list (case-insensitive).

    Args:
        file_path_obj: A `pathlib.Path` object for the file to check.
        extensions_to_check: File extensions, with or without the leading dot
                             (e.g., [".mov", "MOV"]).

    Returns:
        True if the file's extension is in the list, False otherwise.
    """
    normalized_extensions = {
        ext.lower() if ext.startswith(".") else f".{ext.lower()}"
        for ext in extensions_to_check
    }
    if not normalized_extensions:
        return False

    return file_path_obj.suffix.lower() in normalized_extensions
