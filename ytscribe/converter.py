from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from .config import (
    FFMPEG_BINARY,
    OPUS_BITRATE,
    OPUS_CHANNELS,
    OPUS_SAMPLE_RATE,
)
from .errors import ConversionError
from .runner import CommandRunner, SubprocessRunner


def _build_ffmpeg_args(input_path: Path, output_path: Path) -> List[str]:
    # Mono 16 kHz Opus, first audio stream only, no video/cover art
    return [
        FFMPEG_BINARY,
        "-y",
        "-i", str(input_path),
        "-c:a", "libopus",
        "-b:a", OPUS_BITRATE,
        "-ar", str(OPUS_SAMPLE_RATE),
        "-ac", str(OPUS_CHANNELS),
        "-map", "0:a:0",
        "-vn",
        str(output_path),
    ]


def convert_audio(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    runner: Optional[CommandRunner] = None,
) -> Path:
    """
    Re-encode `input_path` into a small speech-friendly Opus file.

    The input file is left in place.
    :raises ConversionError: ffmpeg could not be started or exited non-zero.
    """
    runner = runner or SubprocessRunner()
    input_path = Path(input_path)
    output_path = Path(output_path)
    logger.info(f"Converting {input_path} -> {output_path}")

    try:
        result = runner.run(_build_ffmpeg_args(input_path, output_path))
    except OSError as exc:
        logger.debug(f"Could not start {FFMPEG_BINARY}: {exc}")
        raise ConversionError(f"Failed to execute {FFMPEG_BINARY}") from exc

    if not result.ok:
        logger.debug(f"{FFMPEG_BINARY} exited with code {result.returncode}")
        raise ConversionError(f"{FFMPEG_BINARY} failed: {result.stderr}")

    logger.info(f"Conversion complete: {output_path}")
    return output_path
