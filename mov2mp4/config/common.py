"""
Common configuration settings used throughout the application.

This module contains globally shared configuration settings and constants for
logging, directory layout and job status tracking. It also handles the loading
of user-specific configuration from an external YAML file, allowing directories
and the FFmpeg location to be customized without modifying the source code.
"""
from pathlib import Path
from typing import Sequence

import yaml
from loguru import logger

# --- User-Defined Configuration ---
# This block loads user-specific settings from a 'config.user.yaml' file. The
# working directory is searched first, since 'mov/', 'mp4/' and 'bin/ffmpeg/' are
# resolved from there too; a source checkout's project root comes second.

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
USER_CONFIG_FILE_NAME = "config.user.yaml"


def find_user_config(search_dirs: Sequence[Path] | None = None) -> Path:
    """
    Returns the first existing 'config.user.yaml' among `search_dirs`.

    Defaults to the current working directory, then `PROJECT_ROOT`. When none
    exists the working directory candidate is returned, which `load_user_config`
    treats as "no user config".
    """
    if search_dirs is None:
        search_dirs = (Path.cwd(), PROJECT_ROOT)
    candidates = [directory / USER_CONFIG_FILE_NAME for directory in search_dirs]
    return next((c for c in candidates if c.is_file()), candidates[0])


USER_CONFIG_PATH = find_user_config()


def load_user_config(config_path: Path = USER_CONFIG_PATH) -> dict:
    """
    Reads the user YAML config and returns it as a dictionary.

    A missing file, an empty file or a file that does not parse to a mapping all
    yield an empty dictionary, so callers can always use `.get()` on the result.
    """
    if not config_path.is_file():
        logger.debug(f"User config '{config_path}' not found. Using built-in defaults.")
        return {}
    try:
        with config_path.open("r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not load or parse '{config_path}': {e}")
        return {}
    if not isinstance(user_config, dict):
        logger.warning(f"User config '{config_path}' is not a mapping. Ignoring it.")
        return {}
    return user_config


USER_CONFIG = load_user_config()
_paths_config = USER_CONFIG.get("paths") or {}

# The directory containing the FFmpeg executable, from 'config.user.yaml'.
# It is only consulted when FFmpeg is not found on the system PATH.
MODULE_PATH: Path | None = (
    Path(_paths_config["ffmpeg_dir"]) if _paths_config.get("ffmpeg_dir") else None
)

# Bundled FFmpeg location, relative to the working directory.
LOCAL_FFMPEG_DIR = Path("bin") / "ffmpeg"


# --- Logging Configuration ---

# The format string for the Loguru logger.
LOGGER_FORMAT = (
    "<green>{time:MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# Whether diagnostic text of failed conversions is also appended to a text file.
ERROR_LOG_ENABLED: bool = bool(USER_CONFIG.get("error_log", False))

# Name of the error log file, created inside the output directory.
ERROR_LOG_FILE_NAME = "conversion_errors.txt"


# --- Directory Layout ---

# Directory scanned for source files. Only its immediate entries are considered.
DEFAULT_INPUT_DIR = Path(_paths_config.get("input_dir") or "mov")

# Directory receiving the converted files. Created on first conversion.
DEFAULT_OUTPUT_DIR = Path(_paths_config.get("output_dir") or "mp4")


# --- Job Status Constants ---
# The states a ConversionJob moves through. A job only ever goes
# pending -> running -> succeeded | failed.

JOB_STATUS_PENDING = "pending"  # Discovered, not started yet.
JOB_STATUS_RUNNING = "running"  # The encoder process is running.
JOB_STATUS_SUCCEEDED = "succeeded"  # The encoder exited with code 0.
JOB_STATUS_FAILED = "failed"  # Spawn failure or non-zero exit.

TERMINAL_JOB_STATUSES = (JOB_STATUS_SUCCEEDED, JOB_STATUS_FAILED)
