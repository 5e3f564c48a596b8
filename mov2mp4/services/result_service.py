"""
Collects job outcomes, removes converted sources on request and renders the
end-of-run summary.
"""

from typing import List, Optional

from loguru import logger

from ..domain.exceptions import SourceDeletionError
from ..domain.job import BatchResult, ConversionJob
from .logging_service import ErrorLog


def remove_source(job: ConversionJob):
    """
    Deletes the source file of a succeeded job.

    Raises:
        SourceDeletionError: If the job did not succeed or the file cannot be removed.
    """
    if not job.succeeded:
        raise SourceDeletionError(f"Refusing to delete source of unsuccessful job: {job.name}")
    try:
        job.source.unlink()
    except OSError as e:
        raise SourceDeletionError(f"Could not delete {job.source}: {e}") from e


class ResultAggregator:
    """
    Records finished jobs into a BatchResult and handles post-conversion actions.

    Attributes:
        result (BatchResult): Outcomes recorded so far, in processing order.
        delete_sources (bool): Whether sources of succeeded jobs are removed.
        error_log (Optional[ErrorLog]): Receives the diagnostic text of failed jobs.
    """

    def __init__(self, delete_sources: bool = False, error_log: Optional[ErrorLog] = None):
        self.result = BatchResult()
        self.delete_sources = delete_sources
        self.error_log = error_log

    def record(self, job: ConversionJob):
        self.result.add(job)
        if job.failed and self.error_log:
            self.error_log.write_failure(job.name, job.reason or "")

    def remove_converted_sources(self) -> List[ConversionJob]:
        """
        Removes the source of every succeeded job when deletion is enabled.

        A deletion failure is stored on `job.deletion_error` and logged; the job
        keeps its succeeded status. Failed jobs are never touched.

        Returns:
            The jobs whose source was removed.
        """
        if not self.delete_sources:
            return []

        removed = []
        for job in self.result.succeeded:
            try:
                remove_source(job)
            except SourceDeletionError as e:
                job.deletion_error = str(e)
                logger.error(str(e))
                continue
            logger.info(f"Deleted source file: {job.source}")
            removed.append(job)
        return removed


def summary_lines(result: BatchResult) -> List[str]:
    """Renders the final summary of a batch as printable lines."""
    if result.is_empty:
        return ["No MOV files to convert."]

    lines = [
        "Summary:",
        f"{result.total} Total files processed",
        f"{len(result.succeeded)} Successfully converted",
        f"{len(result.failed)} Failed conversions",
    ]
    for job in result.failed:
        lines.append(f"✗ {job.name}:")
        lines.extend(f"    {reason_line}" for reason_line in (job.reason or "").splitlines())
    deletion_failures = [job for job in result.succeeded if job.deletion_error]
    for job in deletion_failures:
        lines.append(f"! {job.name} converted but not deleted: {job.deletion_error}")
    return lines
