from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol
import os
import sys

from dotenv import find_dotenv, load_dotenv
from loguru import logger

from .errors import ConfigError


# ---- Environment Variables ----

def load_environment() -> Optional[Path]:
    """
    Load variables from a .env file in (or above) the working directory.

    Variables already present in the environment win over the file.
    :return: Path of the loaded .env file, or None if there was none.
    """
    env_path = find_dotenv(usecwd=True)
    if not env_path:
        return None

    load_dotenv(env_path, override=False)
    return Path(env_path)


# Load variables from .env (if it exists) before the defaults below are read
ENV_PATH = load_environment()


class CredentialProvider(Protocol):
    def get_api_key(self) -> Optional[str]:
        ...


class EnvCredentialProvider:
    """
    Reads the transcription API key from the process environment.
    """

    def __init__(self, variable: str = "GROQ_API_KEY") -> None:
        self.variable = variable

    def get_api_key(self) -> Optional[str]:
        return os.getenv(self.variable) or None


# --- Groq / transcription defaults ---
GROQ_API_URL = os.getenv(
    "GROQ_API_URL", "https://api.groq.com/openai/v1/audio/transcriptions"
)
TRANSCRIPTION_MODEL = os.getenv("TRANSCRIPTION_MODEL", "whisper-large-v3")
RESPONSE_FORMAT = "json"

# --- yt-dlp / ffmpeg defaults ---
YTDLP_BINARY = os.getenv("YTDLP_BINARY", "yt-dlp")
FFMPEG_BINARY = os.getenv("FFMPEG_BINARY", "ffmpeg")

DEFAULT_AUDIO_FORMAT = "bestaudio"
# Concurrent fragment downloads handed to yt-dlp (-N)
DOWNLOAD_CONCURRENCY = 8

# Opus settings tuned for speech recognition
OPUS_BITRATE = "24k"
OPUS_SAMPLE_RATE = 16000
OPUS_CHANNELS = 1

# Temporary files, created in the working directory and removed on success
TEMP_AUDIO_FILENAME = "temp_audio.webm"
CONVERTED_AUDIO_FILENAME = "converted_audio.webm"

# --- Output ---
# Overrides the session-based clipboard command, e.g. "xsel --clipboard --input"
CLIPBOARD_COMMAND = os.getenv("CLIPBOARD_COMMAND")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
LOG_FILE = os.getenv("LOG_FILE")


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Send log records to stderr so stdout only ever carries the transcript.

    :raises ConfigError: the level is not one loguru knows.
    """
    level = (level or LOG_LEVEL).upper()
    try:
        logger.level(level)
    except ValueError as exc:
        raise ConfigError(f"Invalid LOG_LEVEL: {level}") from exc

    logger.remove()
    logger.add(sys.stderr, level=level)

    log_file = log_file or LOG_FILE
    if log_file:
        logger.add(
            log_file,
            level="DEBUG",
            rotation="10 MB",
            retention="14 days",
            compression="zip",
            backtrace=True,
            diagnose=True,
        )
        logger.info(f"Logging to file: {log_file}")
