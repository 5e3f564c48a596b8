"""
This module provides utility functions for working with the FFmpeg executables:
locating them, formatting command lines for logs, probing source durations and
reading the progress tokens FFmpeg writes while it runs.
"""

import os
import re
import shlex
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import ffmpeg
from loguru import logger

from ..config.common import LOCAL_FFMPEG_DIR, MODULE_PATH
from .format_utils import timecode_to_seconds

# FFmpeg status lines look like:
# frame=  240 fps= 60 q=28.0 size=    1024kB time=00:00:08.00 bitrate=1048.6kbits/s speed=2.0x
_PROGRESS_TIME_PATTERN = re.compile(r"\btime=\s*(\d+:\d{2}:\d{2}(?:\.\d+)?)")


def executable_name(tool: str) -> str:
    """Returns the platform-specific executable name ('ffmpeg' or 'ffmpeg.exe')."""
    return f"{tool}.exe" if sys.platform == "win32" else tool


def find_tool(tool: str, module_path: Optional[Path] = MODULE_PATH, local_dir: Path = LOCAL_FFMPEG_DIR) -> Optional[str]:
    """
    Locates an FFmpeg suite executable (e.g. 'ffmpeg' or 'ffprobe').

    Lookup order:
    1. The system PATH.
    2. `ffmpeg_dir` from 'config.user.yaml'.
    3. The bundled 'bin/ffmpeg/' directory.

    Returns:
        The path to the executable, or None if it was not found anywhere.
    """
    on_path = shutil.which(tool)
    if on_path:
        logger.debug(f"Using {tool} from system PATH: '{on_path}'")
        return on_path

    exe_name = executable_name(tool)
    for candidate_dir in (module_path, local_dir):
        if not candidate_dir:
            continue
        candidate = candidate_dir / exe_name
        if candidate.is_file():
            logger.debug(f"Using {tool} from '{candidate}'")
            return str(candidate)

    return None


def get_ffmpeg_path() -> str:
    """
    Determines the FFmpeg executable to run.

    Falls back to the bare name 'ffmpeg' when nothing was found, so that every
    conversion fails with a spawn error instead of aborting the whole run.
    """
    ffmpeg_path = find_tool("ffmpeg")
    if ffmpeg_path:
        return ffmpeg_path
    logger.warning(
        "FFmpeg binary not found. Please ensure it's either:\n"
        "1. Installed and available in your system PATH, or\n"
        f"2. Located at '{LOCAL_FFMPEG_DIR / executable_name('ffmpeg')}'"
    )
    return "ffmpeg"


def get_ffprobe_path(ffmpeg_path: str) -> Optional[str]:
    """Looks for ffprobe next to the chosen ffmpeg first, then through `find_tool`."""
    sibling = Path(ffmpeg_path).parent / executable_name("ffprobe")
    if Path(ffmpeg_path).parent != Path(".") and sibling.is_file():
        return str(sibling)
    return find_tool("ffprobe")


def display_cmd(cmd_list: Sequence[str]) -> str:
    """Quotes and joins a command list the way the current platform's shell would read it."""
    if os.name == "nt":
        return subprocess.list2cmdline(list(cmd_list))
    return shlex.join(cmd_list)


def parse_progress_time(line: str) -> Optional[str]:
    """
    Extracts the 'time=' token from an FFmpeg status line.

    Returns:
        The timecode string (e.g. '00:00:08.00'), or None when the line carries
        no usable progress token (including 'time=N/A').
    """
    match = _PROGRESS_TIME_PATTERN.search(line)
    return match.group(1) if match else None


def probe_duration(source: Path, ffprobe_path: Optional[str]) -> Optional[float]:
    """
    Returns the duration of a media file in seconds using ffprobe, or None.

    A failed probe is not an error for the conversion: it only means the
    progress line cannot show a percentage.
    """
    if not ffprobe_path:
        return None
    try:
        probe = ffmpeg.probe(str(source), cmd=ffprobe_path)
    except ffmpeg.Error as e:
        stderr = e.stderr.decode("utf-8", errors="replace") if e.stderr else ""
        logger.debug(f"ffprobe failed for {source.name}: {stderr.strip()[:500]}")
        return None
    except OSError as e:
        logger.debug(f"Could not run ffprobe for {source.name}: {e}")
        return None
    except ValueError as e:
        logger.debug(f"Unreadable ffprobe output for {source.name}: {e}")
        return None

    if not isinstance(probe, dict):
        return None
    duration_str = (probe.get("format") or {}).get("duration")
    if not duration_str:
        return None
    duration = timecode_to_seconds(str(duration_str))
    return duration if duration > 0 else None


def verify_ffmpeg(ffmpeg_path: str) -> bool:
    """
    Runs `ffmpeg -version` and logs the first line of its output.

    Returns:
        True if FFmpeg ran successfully, False otherwise. The caller decides
        whether that matters; conversions report their own spawn errors.
    """
    try:
        result = subprocess.run(
            [ffmpeg_path, "-version"],
            check=True,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except subprocess.CalledProcessError as e:
        logger.error(f"FFmpeg version command failed (return code {e.returncode}):\n{e.stderr}")
        return False
    except OSError as e:
        logger.error(f"FFmpeg could not be executed ('{ffmpeg_path}'): {e}")
        return False

    version_output_lines: List[str] = result.stdout.splitlines()
    if version_output_lines:
        logger.info(f"FFmpeg version check successful: {version_output_lines[0]}")
    return True
