from __future__ import annotations

from typing import Optional


class TranscribeError(Exception):
    """
    Base class for every failure the pipeline reports.

    `stage` names the pipeline step that raised it so the CLI can tell the
    user where the run stopped.
    """

    stage: str = "pipeline"

    def __init__(self, message: str, *, stage: Optional[str] = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class DownloadError(TranscribeError):
    stage = "download"


class ConversionError(TranscribeError):
    stage = "convert"


class ConfigError(TranscribeError):
    stage = "config"


class IoError(TranscribeError):
    # read, write or delete of a local file
    stage = "io"


class RequestError(TranscribeError):
    stage = "transcribe"


class DecodeError(TranscribeError):
    stage = "transcribe"


class SchemaError(TranscribeError):
    stage = "transcribe"


class ClipboardError(TranscribeError):
    stage = "output"


def format_error_chain(exc: BaseException) -> str:
    """
    Render an exception and everything it was raised from, one link per line.
    """
    lines = [f"Error ({getattr(exc, 'stage', 'unknown')} stage): {exc}"]
    cause = exc.__cause__
    while cause is not None:
        lines.append(f"Caused by: {cause}")
        cause = cause.__cause__
    return "\n".join(lines)
