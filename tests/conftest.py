"""Shared fixtures: a stand-in FFmpeg executable and MOV source directories."""

from __future__ import annotations

import stat
import sys
from pathlib import Path
from typing import Callable

import pytest

# Behaves like the parts of FFmpeg the converter relies on: '-version', the
# carriage-return separated status lines on stderr, writing the output file and
# failing with a diagnostic when the input is unreadable.
FAKE_FFMPEG_SOURCE = '''
import sys
from pathlib import Path

args = sys.argv[1:]
if args[:1] == ["-version"]:
    print("ffmpeg version 6.1-fake Copyright (c) 2000-2023 the FFmpeg developers")
    sys.exit(0)

source = Path(args[args.index("-i") + 1])
destination = Path(args[-1])
data = source.read_bytes()

sys.stderr.write("Input #0, mov,mp4,m4a,3gp,3g2,mj2, from '%s':\\n" % source)
if b"corrupt" in data:
    sys.stderr.write("%s: Invalid data found when processing input\\n" % source)
    sys.exit(1)

for second in (1, 2, 3):
    sys.stderr.write(
        "frame=%5d fps=30 q=28.0 size=%6dkB time=00:00:%02d.00 bitrate=1000.0kbits/s speed=1.0x\\r"
        % (second * 30, second * 128, second)
    )
    sys.stderr.flush()
sys.stderr.write("\\nvideo:384kB audio:48kB subtitle:0kB other streams:0kB\\n")
destination.write_bytes(b"mp4:" + data)
'''


@pytest.fixture
def make_script(tmp_path: Path) -> Callable[[str, str], str]:
    """Factory writing an executable Python script into tmp_path/bin and returning its path."""
    if sys.platform == "win32":
        pytest.skip("the fake executables rely on a shebang line")

    def _make(name: str, source: str) -> str:
        script = tmp_path / "bin" / name
        script.parent.mkdir(exist_ok=True)
        script.write_text(f"#!{sys.executable}\n{source}", encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(script)

    return _make


@pytest.fixture
def fake_ffmpeg(make_script: Callable[[str, str], str]) -> str:
    """Path to an executable script that imitates FFmpeg."""
    return make_script("ffmpeg", FAKE_FFMPEG_SOURCE)


@pytest.fixture
def input_dir(tmp_path: Path) -> Path:
    """An empty 'mov' directory."""
    directory = tmp_path / "mov"
    directory.mkdir()
    return directory


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """The 'mp4' directory path; not created, the converter creates it."""
    return tmp_path / "mp4"
