from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

import requests
from loguru import logger

from .config import (
    GROQ_API_URL,
    RESPONSE_FORMAT,
    TRANSCRIPTION_MODEL,
    CredentialProvider,
    EnvCredentialProvider,
)
from .errors import ConfigError, DecodeError, IoError, RequestError, SchemaError


# --- Internal helpers ----
def _require_api_key(credentials: CredentialProvider) -> str:
    api_key = credentials.get_api_key()
    if not api_key:
        raise ConfigError(
            "GROQ_API_KEY is not set. "
            "Export it or create a .env file with GROQ_API_KEY=your_api_key"
        )
    return api_key


def _read_audio(file_path: Path) -> bytes:
    """
    Read the whole audio file; the API takes it in a single multipart body.
    """
    try:
        return file_path.read_bytes()
    except OSError as exc:
        logger.debug(f"Could not read audio file {file_path}: {exc}")
        raise IoError(
            f"Failed to read audio file {file_path}", stage="transcribe"
        ) from exc


def _extract_text(response: requests.Response) -> str:
    try:
        data: Any = response.json()
    except ValueError as exc:
        logger.debug(
            f"Non-JSON response (status {response.status_code}): {response.text!r}"
        )
        raise DecodeError("Failed to parse JSON response") from exc

    text = data.get("text") if isinstance(data, dict) else None
    if not isinstance(text, str):
        logger.debug(f"Unexpected transcription response format: {data}")
        raise SchemaError(
            f"Failed to extract transcript from JSON "
            f"(status {response.status_code}): {data}"
        )
    return text


def build_form_fields(model: str = TRANSCRIPTION_MODEL) -> Dict[str, str]:
    return {
        "model": model,
        "response_format": RESPONSE_FORMAT,
    }


# --- high-level entry point ---
def transcribe_audio(
    file_path: Union[str, Path],
    credentials: Optional[CredentialProvider] = None,
    api_url: str = GROQ_API_URL,
    model: str = TRANSCRIPTION_MODEL,
) -> str:
    """
    Upload a local audio file to the transcription API and return its text.

    The credential is checked before the file is touched or any request is
    made. The returned text is exactly what the API sent back.

    :param file_path: Path to the transcoded audio file.
    :param credentials: Source of the bearer token; defaults to GROQ_API_KEY.
    :param api_url: Transcription endpoint.
    :param model: Model identifier sent with the upload.
    :raises ConfigError: no API key available.
    :raises IoError: the audio file could not be read.
    :raises RequestError: the request failed at the transport level.
    :raises DecodeError: the response body is not JSON.
    :raises SchemaError: the JSON has no string 'text' field.
    """
    credentials = credentials or EnvCredentialProvider()
    api_key = _require_api_key(credentials)

    file_path = Path(file_path)
    audio_bytes = _read_audio(file_path)

    logger.info(
        f"Uploading {file_path} ({len(audio_bytes)} bytes) to {api_url} with model={model}"
    )
    try:
        response = requests.post(
            api_url,
            headers={"Authorization": f"Bearer {api_key}"},
            files={"file": (file_path.name, audio_bytes)},
            data=build_form_fields(model),
        )
    except requests.RequestException as exc:
        logger.debug(f"Transcription request failed: {exc}")
        raise RequestError("Failed to send request") from exc

    if not response.ok:
        logger.warning(
            f"Transcription endpoint answered with status {response.status_code}"
        )

    text = _extract_text(response)
    logger.info(f"Transcription received ({len(text)} characters)")
    return text
