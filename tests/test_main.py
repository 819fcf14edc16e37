"""Tests for the command line entry point."""

from unittest.mock import MagicMock, patch

import pytest

from ytscribe import __version__
from ytscribe.errors import ConfigError, DownloadError
from ytscribe.main import main, parse_args

from .conftest import FakeRunner, make_response

URL = "https://www.youtube.com/watch?v=abc123"


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("ytscribe.main.configure_logging"):
        yield


def test_parse_args_url_only():
    args = parse_args([URL])
    assert args.url == URL
    assert args.output is None


@pytest.mark.parametrize("flag", ["-o", "--output"])
def test_parse_args_output(flag):
    assert parse_args([URL, flag, "out.txt"]).output == "out.txt"


def test_parse_args_requires_url():
    with pytest.raises(SystemExit) as excinfo:
        parse_args([])
    assert excinfo.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        parse_args(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_main_failure_exits_nonzero_with_chain(capsys):
    error = DownloadError("yt-dlp failed: ERROR: Unsupported URL")
    error.__cause__ = OSError("underlying")
    with patch("ytscribe.main.run_pipeline", side_effect=error):
        assert main([URL]) == 1

    err = capsys.readouterr().err
    assert "Error (download stage): yt-dlp failed: ERROR: Unsupported URL" in err
    assert "Caused by: underlying" in err


def test_main_config_error(capsys):
    with patch("ytscribe.main.run_pipeline", side_effect=ConfigError("GROQ_API_KEY is not set.")):
        assert main([URL, "-o", "out.txt"]) == 1
    assert "GROQ_API_KEY" in capsys.readouterr().err


def test_main_success_writes_file(workdir, monkeypatch, capsys):
    monkeypatch.setenv("GROQ_API_KEY", "test-key")
    runner = FakeRunner()
    with patch("ytscribe.pipeline.SubprocessRunner", return_value=runner), patch(
        "ytscribe.transcriber.requests.post",
        return_value=make_response({"text": "hello world"}),
    ):
        assert main([URL, "--output", "out.txt"]) == 0

    assert (workdir / "out.txt").read_text() == "hello world"
    assert not (workdir / "temp_audio.webm").exists()
    assert not (workdir / "converted_audio.webm").exists()
    assert "Output saved to out.txt" in capsys.readouterr().out


def test_main_passes_arguments_through():
    with patch("ytscribe.main.run_pipeline", return_value=MagicMock()) as mock_run:
        assert main([URL, "-o", "t.txt"]) == 0
    mock_run.assert_called_once_with(URL, "t.txt")


def test_main_invalid_log_level_reports_error(capsys):
    with patch(
        "ytscribe.main.configure_logging",
        side_effect=ConfigError("Invalid LOG_LEVEL: LOUD"),
    ), patch("ytscribe.main.run_pipeline") as mock_run:
        assert main([URL]) == 1

    mock_run.assert_not_called()
    assert "Error (config stage): Invalid LOG_LEVEL: LOUD" in capsys.readouterr().err
