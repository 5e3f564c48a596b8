"""
Configuration settings related to video conversion.

This module defines the source and target extensions and the arguments handed
to FFmpeg between the input and the output file.
"""
from .common import USER_CONFIG

# --- File Extensions ---
SOURCE_EXTENSIONS = (".mov",)
TARGET_EXTENSION = ".mp4"

# --- Encoder Settings ---
VIDEO_CODEC = "libx264"
AUDIO_CODEC = "aac"
DEFAULT_ENCODER_ARGS = ("-c:v", VIDEO_CODEC, "-c:a", AUDIO_CODEC)

_encoding_config = USER_CONFIG.get("encoding") or {}

# Arguments placed between '-i <source>' and the output path. Overridable through
# 'encoding.args' in 'config.user.yaml'.
ENCODER_ARGS: tuple[str, ...] = tuple(
    str(arg) for arg in (_encoding_config.get("args") or DEFAULT_ENCODER_ARGS)
)

# --- Progress Reporting ---

# Number of trailing encoder output lines kept as diagnostic text for a failed job.
DIAGNOSTIC_TAIL_LINES = 20
