"""
This module provides the ErrorLog, a plain-text record of failed conversions.

It is separate from the real-time console logging: each failure's file name,
command output and timestamp are appended to a text file so they survive the
terminal session.
"""

from datetime import datetime
from pathlib import Path

from loguru import logger

from ..config.common import ERROR_LOG_FILE_NAME


class ErrorLog:
    """
    Appends human-readable error entries to a text file.

    Each call to `write` adds one entry followed by a separator line, making the
    file a chronological record of failures across runs.
    """

    # A decorative separator line used between entries.
    linesep_marker: str = "=" * 50

    def __init__(self, error_log_dir: Path, filename: str = ERROR_LOG_FILE_NAME):
        self.log_dir = error_log_dir
        self.log_file_path = self.log_dir / filename

    def write(self, *error_messages: str):
        """
        Writes one or more error messages to the log file.

        Args:
            *error_messages: Pieces of the entry, each written on its own line.
        """
        if not error_messages:
            return

        content_to_write = "\n".join(error_messages) + "\n" + self.linesep_marker + "\n"

        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            with self.log_file_path.open("a", encoding="utf-8") as f:
                f.write(content_to_write)
        except OSError as e:
            # Fall back to the console logger so the messages are not lost.
            logger.error(f"Failed to write to error log {self.log_file_path}: {e}")
            for msg in error_messages:
                logger.error(f"  - {msg}")

    def write_failure(self, file_name: str, reason: str):
        self.write(
            f"[{datetime.now().isoformat(timespec='seconds')}] Conversion failed for: {file_name}",
            reason,
        )
