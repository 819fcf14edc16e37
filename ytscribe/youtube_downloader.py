from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from .config import DEFAULT_AUDIO_FORMAT, DOWNLOAD_CONCURRENCY, YTDLP_BINARY
from .errors import DownloadError
from .runner import CommandRunner, SubprocessRunner


def _build_yt_dlp_args(url: str, output_path: Path) -> List[str]:
    """
    Building the yt-dlp command line: best audio only, written to output_path
    """
    return [
        YTDLP_BINARY,
        "-f", DEFAULT_AUDIO_FORMAT,
        f"-N{DOWNLOAD_CONCURRENCY}",
        # a leftover temp file from a failed run must not be reused
        "--force-overwrites",
        "-o", str(output_path),
        "--",
        url,
    ]


def download_audio(
    url: str,
    output_path: Union[str, Path],
    runner: Optional[CommandRunner] = None,
) -> Path:
    """
    Download the best available audio track of `url` into `output_path`.

    :raises DownloadError: yt-dlp could not be started or exited non-zero.
    """
    runner = runner or SubprocessRunner()
    output_path = Path(output_path)
    logger.info(f"Starting download for URL: {url}")

    try:
        result = runner.run(_build_yt_dlp_args(url, output_path))
    except OSError as exc:
        logger.debug(f"Could not start {YTDLP_BINARY}: {exc}")
        raise DownloadError(f"Failed to execute {YTDLP_BINARY}") from exc

    if not result.ok:
        logger.debug(f"{YTDLP_BINARY} exited with code {result.returncode}")
        raise DownloadError(f"{YTDLP_BINARY} failed: {result.stderr}")

    logger.info(f"Download complete: {output_path}")
    return output_path
