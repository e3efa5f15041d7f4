"""Tests for the uploader preflight check."""

import logging
from unittest.mock import patch

import pytest

from src.adapters.driven.config.health_check import check_ping_file, main
from src.adapters.driven.config.settings import Settings

__all__ = []

MODULE = "src.adapters.driven.config.health_check"


@pytest.fixture
def ping_file(tmp_path):
    """Write a valid stored ping and return its path."""
    path = tmp_path / "abc"
    path.write_text('/submit/app/metrics/1/abc\n{"ping": 1}', encoding="utf-8")
    return path


def test_preflight_config_only(monkeypatch) -> None:
    """Without PING_FILE_PATH only configuration should be checked."""
    monkeypatch.delenv("PING_FILE_PATH", raising=False)
    with (
        patch(f"{MODULE}.configure_logs"),
        patch(f"{MODULE}.load_settings", return_value=Settings()),
        patch(f"{MODULE}.check_ping_file") as mock_check,
    ):
        result = main()

    assert result == 0
    mock_check.assert_not_called()


def test_preflight_failure_on_config_error(monkeypatch) -> None:
    """Preflight should return 1 when configuration fails to load."""
    monkeypatch.delenv("PING_FILE_PATH", raising=False)
    with (
        patch(f"{MODULE}.configure_logs"),
        patch(f"{MODULE}.load_settings", side_effect=RuntimeError("Invalid configuration")),
    ):
        result = main()

    assert result == 1


def test_preflight_reads_ping_file(monkeypatch, ping_file) -> None:
    """A readable stored ping should pass."""
    monkeypatch.setenv("PING_FILE_PATH", str(ping_file))
    with (
        patch(f"{MODULE}.configure_logs"),
        patch(f"{MODULE}.load_settings", return_value=Settings()),
    ):
        result = main()

    assert result == 0


@pytest.mark.parametrize("content", ["", '{"ping": 1}\n'])
def test_preflight_failure_on_bad_ping_file(monkeypatch, tmp_path, content: str) -> None:
    """An empty or path-less ping file should fail the preflight."""
    bad = tmp_path / "bad"
    bad.write_text(content, encoding="utf-8")
    monkeypatch.setenv("PING_FILE_PATH", str(bad))
    with (
        patch(f"{MODULE}.configure_logs"),
        patch(f"{MODULE}.load_settings", return_value=Settings()),
    ):
        result = main()

    assert result == 1


def test_preflight_failure_on_missing_ping_file(monkeypatch, tmp_path) -> None:
    """A missing ping file should fail the preflight."""
    monkeypatch.setenv("PING_FILE_PATH", str(tmp_path / "missing"))
    with (
        patch(f"{MODULE}.configure_logs"),
        patch(f"{MODULE}.load_settings", return_value=Settings()),
    ):
        result = main()

    assert result == 1


def test_check_ping_file_reports_debug_view_destination(ping_file, caplog) -> None:
    """Tagged configurations should report the debug view endpoint."""
    settings = Settings(debug_view_endpoint="https://debug.example.org", debug_tag="tag")

    with caplog.at_level(logging.INFO, logger=MODULE):
        ping = check_ping_file(settings, str(ping_file))

    assert ping.url_path == "/submit/app/metrics/1/abc"
    assert "https://debug.example.org/submit/app/metrics/1/abc" in caplog.text
