"""Unit tests for the FFmpeg-driving converter."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Callable

from mov2mp4.config.common import JOB_STATUS_FAILED, JOB_STATUS_SUCCEEDED
from mov2mp4.domain.job import ConversionJob
from mov2mp4.services.encoder_service import (
    MovConverter,
    build_command,
    format_progress,
)


def test_build_command_overwrites_and_places_paths() -> None:
    """Ensure the command is: overwrite output, input, encoder args, output."""
    cmd = build_command("ffmpeg", Path("mov/a.MOV"), Path("mp4/a.mp4"), ("-c:v", "libx264"))

    assert cmd[0] == "ffmpeg"
    assert "-y" in cmd
    assert cmd[cmd.index("-i") + 1] == str(Path("mov/a.MOV"))
    assert cmd[-3:] == ["-c:v", "libx264", str(Path("mp4/a.mp4"))]


def test_format_progress_with_and_without_duration() -> None:
    """Ensure the progress line shows encoded time, elapsed time and a percentage when known."""
    elapsed = timedelta(seconds=3)

    assert format_progress("00:00:08.00", elapsed) == "encoded 00:00:08 | elapsed 00:00:03"
    assert format_progress("00:00:15.00", elapsed, duration=60.0) == (
        "encoded 00:00:15 / 00:01:00 (25%) | elapsed 00:00:03"
    )


def test_successful_conversion(fake_ffmpeg: str, input_dir: Path, output_dir: Path) -> None:
    """Ensure exit code 0 marks the job succeeded and progress is reported per status line."""
    source = input_dir / "clip.MOV"
    source.write_bytes(b"frames")
    job = ConversionJob(source, output_dir)
    progress: list[str] = []

    MovConverter(fake_ffmpeg).convert(job, on_progress=lambda _job, line: progress.append(line))

    assert job.status == JOB_STATUS_SUCCEEDED
    assert job.reason is None
    assert job.destination == output_dir / "clip.mp4"
    assert job.destination.read_bytes() == b"mp4:frames"
    assert [line.split(" | ")[0] for line in progress] == [
        "encoded 00:00:01",
        "encoded 00:00:02",
        "encoded 00:00:03",
    ]
    assert all("elapsed" in line for line in progress)
    assert job.last_progress == "00:00:03.00"
    assert source.exists()


def test_non_zero_exit_marks_job_failed_with_diagnostics(
    fake_ffmpeg: str, input_dir: Path, output_dir: Path
) -> None:
    """Ensure a non-zero exit fails the job and keeps FFmpeg's error text."""
    source = input_dir / "broken.mov"
    source.write_bytes(b"corrupt")
    job = ConversionJob(source, output_dir)

    MovConverter(fake_ffmpeg).convert(job)

    assert job.status == JOB_STATUS_FAILED
    assert "Invalid data found when processing input" in job.reason
    assert source.exists()


def test_spawn_failure_marks_job_failed(tmp_path: Path, input_dir: Path, output_dir: Path) -> None:
    """Ensure a missing encoder binary fails the job instead of raising."""
    source = input_dir / "clip.mov"
    source.write_bytes(b"frames")
    job = ConversionJob(source, output_dir)
    missing = str(tmp_path / "nowhere" / "ffmpeg")

    MovConverter(missing).convert(job)

    assert job.status == JOB_STATUS_FAILED
    assert "Failed to start encoder" in job.reason
    assert missing in job.reason


def test_converter_creates_output_directory(fake_ffmpeg: str, input_dir: Path, tmp_path: Path) -> None:
    """Ensure a nested, missing output directory is created before FFmpeg runs."""
    source = input_dir / "clip.mov"
    source.write_bytes(b"frames")
    output_dir = tmp_path / "out" / "nested"
    job = ConversionJob(source, output_dir)

    MovConverter(fake_ffmpeg).convert(job)

    assert job.status == JOB_STATUS_SUCCEEDED
    assert (output_dir / "clip.mp4").is_file()


def test_silent_encoder_failure_reports_exit_code(
    make_script: Callable[[str, str], str], input_dir: Path, output_dir: Path
) -> None:
    """Ensure a non-zero exit without any output still yields diagnostic text."""
    silent_ffmpeg = make_script("silent-ffmpeg", "import sys\nsys.exit(3)\n")
    source = input_dir / "clip.mov"
    source.write_bytes(b"frames")
    job = ConversionJob(source, output_dir)

    MovConverter(silent_ffmpeg).convert(job)

    assert job.status == JOB_STATUS_FAILED
    assert job.reason == "ffmpeg exited with code 3"


def test_unreadable_ffprobe_output_does_not_fail_conversion(
    make_script: Callable[[str, str], str], fake_ffmpeg: str, input_dir: Path, output_dir: Path
) -> None:
    """Ensure ffprobe answering with something other than JSON only drops the percentage."""
    ffprobe = make_script("ffprobe", "print('not json')\n")
    source = input_dir / "clip.mov"
    source.write_bytes(b"frames")
    job = ConversionJob(source, output_dir)
    progress: list[str] = []

    MovConverter(fake_ffmpeg, ffprobe_path=ffprobe).convert(job, on_progress=lambda _job, line: progress.append(line))

    assert job.status == JOB_STATUS_SUCCEEDED
    assert progress
    assert all("%" not in line for line in progress)


def test_unexpected_error_marks_job_failed(fake_ffmpeg: str, input_dir: Path, output_dir: Path) -> None:
    """Ensure an exception raised during a conversion is recorded on the job instead of escaping."""
    source = input_dir / "clip.mov"
    source.write_bytes(b"frames")
    job = ConversionJob(source, output_dir)

    def broken_progress(_job: ConversionJob, _line: str) -> None:
        raise RuntimeError("progress display went away")

    MovConverter(fake_ffmpeg).convert(job, on_progress=broken_progress)

    assert job.status == JOB_STATUS_FAILED
    assert "RuntimeError" in job.reason
    assert "progress display went away" in job.reason
