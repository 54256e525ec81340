"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from testrun_orchestrator.cli import main

_OFFLINE = ["--skip-version-check", "--skip-connection-check"]


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TESTRUN_ACCESS_TOKEN", raising=False)
    return tmp_path


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option" in captured.err
    assert "--bogus" in captured.err
    assert "Traceback" not in captured.err


def test_invalid_verbosity_returns_clean_click_error(capsys) -> None:
    exit_code = main(["--verbosity", "loud"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Invalid value" in captured.err
    assert "--verbosity" in captured.err


def test_wrong_report_extension_is_reported_without_traceback(capsys) -> None:
    exit_code = main(["--output-html-file", "out.txt", *_OFFLINE])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert captured.err.startswith("output_html_file: ")
    assert ".html" in captured.err
    assert "Traceback" not in captured.err


def test_missing_session_is_reported(capsys) -> None:
    exit_code = main(["--skip-version-check"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "No connected session is available" in captured.err


def test_malformed_webhook_is_reported(capsys) -> None:
    exit_code = main(["--teams-channel-webhook-uri", "not a uri", *_OFFLINE])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "teams_channel_webhook_uri" in captured.err


def test_missing_test_folder_is_reported(capsys, isolated_cwd: Path) -> None:
    exit_code = main([str(isolated_cwd / "nowhere"), *_OFFLINE])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "does not exist" in captured.err
    assert not (isolated_cwd / "test-results").exists()


def test_missing_configuration_file_is_reported(capsys) -> None:
    exit_code = main(["--config", "missing.yaml", *_OFFLINE])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Configuration file not found" in captured.err


def test_invalid_tag_is_reported(capsys) -> None:
    exit_code = main(["--tag", "my tag", *_OFFLINE])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert captured.err.startswith("tag: ")
    assert "Traceback" not in captured.err
