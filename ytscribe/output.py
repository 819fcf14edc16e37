"""Delivery of the finished transcript: file, or stdout plus clipboard."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Literal, Optional, Union
import os
import shlex
import subprocess
import sys

from loguru import logger

from .config import CLIPBOARD_COMMAND
from .errors import ClipboardError, IoError

# Default clipboard commands by session type
DEFAULT_CLIPBOARD_WAYLAND = "wl-copy"
DEFAULT_CLIPBOARD_X11 = "xclip -selection clipboard"
DEFAULT_CLIPBOARD_MACOS = "pbcopy"
DEFAULT_CLIPBOARD_WINDOWS = "clip"

ClipboardWriter = Callable[[str], None]


def get_session_type() -> Literal["wayland", "x11", "macos", "windows", "unknown"]:
    """Detect the current desktop session type."""
    if sys.platform == "darwin":
        return "macos"
    if sys.platform.startswith("win"):
        return "windows"

    session_type = os.environ.get("XDG_SESSION_TYPE", "").lower()
    if session_type == "wayland" or os.environ.get("WAYLAND_DISPLAY"):
        return "wayland"
    if session_type == "x11" or os.environ.get("DISPLAY"):
        return "x11"
    return "unknown"


def _default_clipboard_command() -> Optional[str]:
    return {
        "wayland": DEFAULT_CLIPBOARD_WAYLAND,
        "x11": DEFAULT_CLIPBOARD_X11,
        "macos": DEFAULT_CLIPBOARD_MACOS,
        "windows": DEFAULT_CLIPBOARD_WINDOWS,
    }.get(get_session_type())


def _resolve_clipboard_command(command: Optional[str]) -> List[str]:
    command = command or CLIPBOARD_COMMAND or _default_clipboard_command()
    if not command:
        raise ClipboardError(
            "No clipboard command configured and couldn't determine a default "
            f"for session type: {get_session_type()}"
        )
    return shlex.split(command)


def copy_to_clipboard(text: str, command: Optional[str] = None) -> None:
    """
    Pipe `text` into the system clipboard command.

    Args:
        text: The text to copy
        command: Command line to use instead of CLIPBOARD_COMMAND or the
            session default

    Raises:
        ClipboardError: no command available, it could not be started, or
            it exited non-zero
    """
    args = _resolve_clipboard_command(command)
    logger.debug(f"Executing clipboard command: {' '.join(args)}")

    # xclip forks a child that keeps serving the selection; any piped output
    # would make run() wait on that child. stderr is left on the terminal.
    try:
        completed = subprocess.run(
            args,
            input=text.encode("utf-8"),
            stdout=subprocess.DEVNULL,
        )
    except OSError as exc:
        logger.debug(f"Clipboard command could not be started: {args[0]}")
        raise ClipboardError(f"Failed to execute clipboard command {args[0]}") from exc

    if completed.returncode != 0:
        logger.debug(f"Clipboard command failed with code {completed.returncode}")
        raise ClipboardError(
            f"Clipboard command {args[0]} failed with code {completed.returncode}"
        )


def write_transcript(text: str, output_path: Union[str, Path]) -> Path:
    """Create (or overwrite) `output_path` holding exactly the transcript."""
    output_path = Path(output_path)
    logger.info(f"Saving transcript to {output_path}")

    try:
        with output_path.open("wb") as f:
            f.write(text.encode("utf-8"))
    except OSError as exc:
        logger.debug(f"Could not write {output_path}: {exc}")
        raise IoError(
            f"Failed to write transcript to file {output_path}", stage="output"
        ) from exc

    print(f"Transcription completed. Output saved to {output_path}")
    return output_path


def emit_transcript(text: str, clipboard: Optional[ClipboardWriter] = None) -> None:
    """Print the transcript to stdout, then copy it to the clipboard.

    A clipboard failure propagates as ClipboardError after the transcript
    has already been printed.
    """
    clipboard = clipboard or copy_to_clipboard

    print("Transcription:")
    print(text)
    sys.stdout.flush()

    clipboard(text)
    print("\nThe transcription has been copied to your clipboard.")
