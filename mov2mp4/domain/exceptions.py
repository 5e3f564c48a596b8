"""
Defines custom exception types for mov2mp4.

The hierarchy separates the single fatal condition (the input directory cannot
be read) from per-job conditions, which are recorded on the job and never stop
the batch.

All custom exceptions inherit from the base `Mov2Mp4Exception`.
"""


class Mov2Mp4Exception(Exception):
    """Base class for all custom exceptions in mov2mp4."""

    pass


# --- Fatal ---
class DiscoveryError(Mov2Mp4Exception):
    """
    Raised when the input directory is missing, is not a directory or cannot be read.

    This aborts the whole run before any job is created.
    """

    pass


# --- Per Job ---
class JobException(Mov2Mp4Exception):
    """Base class for errors that only affect a single conversion job."""

    pass


class ConversionError(JobException):
    """
    Raised when the encoder cannot be spawned or exits with a non-zero code.

    The message carries the captured diagnostic text.
    """

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class SourceDeletionError(JobException):
    """
    Raised when a successfully converted source file cannot be removed.

    The job keeps its succeeded status.
    """

    pass
