"""
This module defines the MovConverter, the service that drives FFmpeg for a single
job. It builds the command line, spawns the process, follows FFmpeg's status
output to report progress and turns the exit status into the job's final state.
"""

import collections
import subprocess
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from loguru import logger

from ..config.video import DIAGNOSTIC_TAIL_LINES, ENCODER_ARGS
from ..domain.exceptions import ConversionError
from ..domain.job import ConversionJob
from ..utils.ffmpeg_utils import display_cmd, parse_progress_time, probe_duration
from ..utils.format_utils import format_timedelta, timecode_to_seconds

# Called with the job and a human-readable progress line.
ProgressCallback = Callable[[ConversionJob, str], None]


def build_command(ffmpeg_path: str, source: Path, destination: Path, encoder_args: Sequence[str] = ENCODER_ARGS) -> List[str]:
    """Returns the FFmpeg argument list: overwrite output, input=<source>, output=<destination>."""
    return [
        ffmpeg_path,
        "-hide_banner",
        "-y",
        "-i",
        str(source),
        *encoder_args,
        str(destination),
    ]


def format_progress(timecode: str, elapsed: timedelta, duration: Optional[float] = None) -> str:
    """
    Builds the progress line shown while a file converts.

    Examples:
        "encoded 00:00:08 | elapsed 00:00:03"
        "encoded 00:00:08 / 00:01:00 (13%) | elapsed 00:00:03"
    """
    encoded_seconds = timecode_to_seconds(timecode)
    encoded = format_timedelta(timedelta(seconds=encoded_seconds))
    if duration:
        percent = min(100, int(encoded_seconds / duration * 100))
        total = format_timedelta(timedelta(seconds=duration))
        return f"encoded {encoded} / {total} ({percent}%) | elapsed {format_timedelta(elapsed)}"
    return f"encoded {encoded} | elapsed {format_timedelta(elapsed)}"


def _is_status_line(line: str) -> bool:
    return parse_progress_time(line) is not None or line.startswith(("frame=", "size="))


class MovConverter:
    """
    Converts one job at a time by running FFmpeg as a blocking subprocess.

    FFmpeg's stderr is merged into stdout and read line by line in text mode, so
    the carriage-return separated status updates arrive as individual lines.
    Status lines feed the progress callback; every other line is kept (the last
    `DIAGNOSTIC_TAIL_LINES` of them) as the diagnostic text of a failed job.

    Attributes:
        ffmpeg_path (str): The FFmpeg executable to run.
        encoder_args (tuple): Arguments placed between the input and the output.
        ffprobe_path (Optional[str]): Used to probe durations for a percentage; optional.
    """

    def __init__(
        self,
        ffmpeg_path: str,
        encoder_args: Sequence[str] = ENCODER_ARGS,
        ffprobe_path: Optional[str] = None,
    ):
        self.ffmpeg_path = ffmpeg_path
        self.encoder_args = tuple(encoder_args)
        self.ffprobe_path = ffprobe_path

    def convert(self, job: ConversionJob, on_progress: Optional[ProgressCallback] = None) -> ConversionJob:
        """
        Runs the conversion for `job` and sets its terminal status.

        Never raises for a per-job problem: spawn failures and non-zero exits are
        recorded on the job as 'failed' with their diagnostic text.
        """
        job.mark_running()
        start = datetime.now()
        try:
            self._prepare_output_dir(job)
            self._run(job, start, on_progress)
        except ConversionError as e:
            job.mark_failed(str(e), datetime.now() - start)
            logger.debug(f"Conversion failed for {job.name}: {e}")
        except Exception as e:
            job.mark_failed(f"Unexpected error: {type(e).__name__} - {e}", datetime.now() - start)
            logger.opt(exception=e).error(f"An unexpected error occurred while converting {job.name}: {e}")
        else:
            job.mark_succeeded(datetime.now() - start)
            logger.debug(f"Converted {job.name} -> {job.destination} in {format_timedelta(job.elapsed)}")
        return job

    @staticmethod
    def _prepare_output_dir(job: ConversionJob):
        try:
            job.destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConversionError(f"Cannot create output directory {job.destination.parent}: {e}") from e

    def _run(self, job: ConversionJob, start: datetime, on_progress: Optional[ProgressCallback]):
        cmd = build_command(self.ffmpeg_path, job.source, job.destination, self.encoder_args)
        logger.debug(f"Executing: {display_cmd(cmd)}")
        duration = probe_duration(job.source, self.ffprobe_path)

        try:
            process = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise ConversionError(f"Failed to start encoder '{cmd[0]}': {e}") from e

        diagnostics = collections.deque(maxlen=DIAGNOSTIC_TAIL_LINES)
        with process:
            for raw_line in process.stdout:
                line = raw_line.strip()
                if not line:
                    continue
                if not _is_status_line(line):
                    diagnostics.append(line)
                    logger.trace(f"[ffmpeg] {line}")
                    continue
                timecode = parse_progress_time(line)
                if timecode:
                    job.last_progress = timecode
                    if on_progress:
                        on_progress(job, format_progress(timecode, datetime.now() - start, duration))
            returncode = process.wait()

        if returncode != 0:
            message = "\n".join(diagnostics) or f"ffmpeg exited with code {returncode}"
            raise ConversionError(message, returncode=returncode)
