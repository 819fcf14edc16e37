from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence
import subprocess

from loguru import logger


@dataclass
class CommandResult:
    """
    Outcome of one external tool invocation.
    """

    returncode: int
    stderr: str     # captured standard error, decoded leniently

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    def run(self, args: Sequence[str]) -> CommandResult:
        ...


class SubprocessRunner:
    """
    Runs a command to completion and captures its stderr.

    Raises OSError (e.g. FileNotFoundError) when the executable cannot be
    started; callers turn that into their own stage error.
    """

    def run(self, args: Sequence[str]) -> CommandResult:
        logger.debug(f"Running command: {' '.join(args)}")
        completed = subprocess.run(
            list(args),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        stderr = completed.stderr.decode("utf-8", errors="replace")
        logger.debug(f"Command exited with code {completed.returncode}")
        return CommandResult(returncode=completed.returncode, stderr=stderr)
