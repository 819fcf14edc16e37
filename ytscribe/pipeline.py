from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Union

from loguru import logger

from .config import (
    CONVERTED_AUDIO_FILENAME,
    TEMP_AUDIO_FILENAME,
    CredentialProvider,
)
from .converter import convert_audio
from .errors import IoError
from .output import ClipboardWriter, emit_transcript, write_transcript
from .runner import CommandRunner, SubprocessRunner
from .transcriber import transcribe_audio
from .youtube_downloader import download_audio


class Stage(str, Enum):
    FETCHING = "Fetching"
    CONVERTING = "Converting"
    TRANSCRIBING = "Transcribing"
    DONE = "Done"


@dataclass
class PipelineResult:
    """
    What a successful run produced and where it went.
    """

    transcript: str
    output_path: Optional[Path]     # None means stdout + clipboard


def _remove_temp_files(paths: Iterable[Path]) -> None:
    for path in paths:
        try:
            path.unlink()
        except OSError as exc:
            logger.debug(f"Failed to delete temporary file {path}: {exc}")
            raise IoError(
                f"Failed to remove temporary file {path}", stage="cleanup"
            ) from exc
        logger.info(f"Deleted temporary file: {path}")


def run_pipeline(
    url: str,
    output_path: Optional[Union[str, Path]] = None,
    *,
    runner: Optional[CommandRunner] = None,
    credentials: Optional[CredentialProvider] = None,
    clipboard: Optional[ClipboardWriter] = None,
    workdir: Optional[Union[str, Path]] = None,
) -> PipelineResult:
    """
    Download -> convert -> transcribe -> deliver, stopping at the first error.

    - Download best audio with yt-dlp into temp_audio.webm
    - Convert it with ffmpeg into converted_audio.webm
    - Upload that to the transcription API
    - Write the transcript to `output_path`, or print it and copy it to the clipboard
    - Delete both temporary files (only once everything above succeeded)

    Any stage error propagates unchanged; nothing is cleaned up in that case.
    """
    runner = runner or SubprocessRunner()
    workdir = Path(workdir) if workdir is not None else Path.cwd()
    audio_file = workdir / TEMP_AUDIO_FILENAME
    converted_audio = workdir / CONVERTED_AUDIO_FILENAME

    logger.info(f"[{Stage.FETCHING.value}] {url}")
    download_audio(url, audio_file, runner=runner)

    logger.info(f"[{Stage.CONVERTING.value}] {audio_file}")
    convert_audio(audio_file, converted_audio, runner=runner)

    logger.info(f"[{Stage.TRANSCRIBING.value}] {converted_audio}")
    transcript = transcribe_audio(converted_audio, credentials=credentials)

    if output_path is not None:
        output_path = write_transcript(transcript, output_path)
    else:
        emit_transcript(transcript, clipboard=clipboard)

    _remove_temp_files((audio_file, converted_audio))

    logger.info(f"[{Stage.DONE.value}] pipeline finished for {url}")
    return PipelineResult(transcript=transcript, output_path=output_path)
