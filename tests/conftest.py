"""Shared fakes for pipeline tests."""

from pathlib import Path
from typing import Dict, List, Optional, Sequence
from unittest.mock import MagicMock

import pytest

from ytscribe.config import FFMPEG_BINARY, YTDLP_BINARY
from ytscribe.runner import CommandResult


class FakeRunner:
    """CommandRunner that records invocations instead of starting processes.

    On success it creates the file the real tool would have written, so the
    next stage and the cleanup step find it on disk.
    """

    def __init__(self, results: Optional[Dict[str, CommandResult]] = None):
        self.results = results or {}
        self.calls: List[List[str]] = []

    def binaries(self) -> List[str]:
        return [call[0] for call in self.calls]

    def run(self, args: Sequence[str]) -> CommandResult:
        args = list(args)
        self.calls.append(args)
        result = self.results.get(args[0], CommandResult(returncode=0, stderr=""))
        if result.ok:
            if args[0] == YTDLP_BINARY:
                Path(args[args.index("-o") + 1]).write_bytes(b"raw audio")
            elif args[0] == FFMPEG_BINARY:
                Path(args[-1]).write_bytes(b"opus audio")
        return result


class FakeCredentials:
    def __init__(self, api_key: Optional[str] = "test-key"):
        self.api_key = api_key

    def get_api_key(self) -> Optional[str]:
        return self.api_key


def make_response(payload=None, status_code: int = 200, json_error: bool = False):
    """Build a stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    if json_error:
        response.json.side_effect = ValueError("Expecting value: line 1 column 1")
        response.text = "<html>Bad Gateway</html>"
    else:
        response.json.return_value = payload
        response.text = str(payload)
    return response


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def credentials():
    return FakeCredentials()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run each test from an empty temporary working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
