"""
Data models for a conversion batch.

`ConversionJob` tracks one source-to-destination conversion attempt through its
states, and `BatchResult` keeps the ordered outcomes of a run for the final
summary. Neither is persisted; a run starts from scratch every time.
"""

from datetime import timedelta
from pathlib import Path
from typing import Iterator, List, Optional

from ..config.common import (
    JOB_STATUS_FAILED,
    JOB_STATUS_PENDING,
    JOB_STATUS_RUNNING,
    JOB_STATUS_SUCCEEDED,
    TERMINAL_JOB_STATUSES,
)
from ..config.video import TARGET_EXTENSION


def derive_destination(source: Path, output_dir: Path) -> Path:
    """
    Returns the MP4 path for a source file: same stem, '.mp4', inside `output_dir`.

    For example, 'mov/foo.MOV' with output dir 'mp4' becomes 'mp4/foo.mp4'.
    """
    return output_dir / f"{source.stem}{TARGET_EXTENSION}"


class ConversionJob:
    """
    A single conversion attempt.

    Lifecycle:
    1. Created as 'pending' when the source file is discovered.
    2. `mark_running()` when the encoder process is started.
    3. `mark_succeeded()` or `mark_failed()` once the process exits or fails to spawn.

    Attributes:
        source (Path): The MOV file to convert.
        destination (Path): The derived MP4 path.
        status (str): One of the `JOB_STATUS_*` constants in `config.common`.
        reason (Optional[str]): Diagnostic text of a failed job.
        elapsed (timedelta): Wall-clock time spent in the encoder.
        last_progress (Optional[str]): The last progress token read from the encoder.
        deletion_error (Optional[str]): Why the source could not be deleted, if it could not.
    """

    def __init__(self, source: Path, output_dir: Path):
        self.source = source
        self.destination = derive_destination(source, output_dir)
        self.status: str = JOB_STATUS_PENDING
        self.reason: Optional[str] = None
        self.elapsed: timedelta = timedelta(0)
        self.last_progress: Optional[str] = None
        self.deletion_error: Optional[str] = None

    def __repr__(self) -> str:
        return f"ConversionJob(source={self.source!s}, status={self.status})"

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def is_finished(self) -> bool:
        return self.status in TERMINAL_JOB_STATUSES

    @property
    def succeeded(self) -> bool:
        return self.status == JOB_STATUS_SUCCEEDED

    @property
    def failed(self) -> bool:
        return self.status == JOB_STATUS_FAILED

    def mark_running(self):
        if self.status != JOB_STATUS_PENDING:
            raise ValueError(f"Cannot start job for {self.name} in status '{self.status}'.")
        self.status = JOB_STATUS_RUNNING

    def mark_succeeded(self, elapsed: timedelta):
        self._finish(JOB_STATUS_SUCCEEDED, elapsed)

    def mark_failed(self, reason: str, elapsed: timedelta = timedelta(0)):
        self.reason = reason
        self._finish(JOB_STATUS_FAILED, elapsed)

    def _finish(self, status: str, elapsed: timedelta):
        if self.is_finished:
            raise ValueError(f"Job for {self.name} already finished as '{self.status}'.")
        self.status = status
        self.elapsed = elapsed


class BatchResult:
    """Ordered outcomes of every job in a run, in the order they were processed."""

    def __init__(self):
        self.jobs: List[ConversionJob] = []

    def __iter__(self) -> Iterator[ConversionJob]:
        return iter(self.jobs)

    def __len__(self) -> int:
        return len(self.jobs)

    def add(self, job: ConversionJob):
        if not job.is_finished:
            raise ValueError(f"Only finished jobs can be recorded, got {job!r}.")
        self.jobs.append(job)

    @property
    def total(self) -> int:
        return len(self.jobs)

    @property
    def is_empty(self) -> bool:
        return not self.jobs

    @property
    def succeeded(self) -> List[ConversionJob]:
        return [job for job in self.jobs if job.succeeded]

    @property
    def failed(self) -> List[ConversionJob]:
        return [job for job in self.jobs if job.failed]
