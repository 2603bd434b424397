"""Tests for gardensim.main module."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from gardensim import __version__
from gardensim.core.config import LoggingConfig
from gardensim.main import app, main, setup_logging

runner = CliRunner()


def test_version() -> None:
    """Test that version is defined and follows semver."""
    assert __version__
    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_app_shows_help() -> None:
    """Test that app shows help when called with no args."""
    result = runner.invoke(app, [])
    # With no_args_is_help=True, typer shows help but exits with code 2
    assert result.exit_code == 2
    assert "Usage:" in result.stdout


def test_main_returns_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() converts SystemExit into a return code."""
    monkeypatch.setattr("sys.argv", ["gsim", "validate", "/nonexistent.yaml"])
    assert main() == 1


def test_setup_logging_replaces_handlers(tmp_path: Path) -> None:
    """Repeated setup installs one console and one file handler."""
    log_file = tmp_path / "logs" / "garden.log"
    config = LoggingConfig(level="DEBUG", file=str(log_file))
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level

    try:
        setup_logging(config)
        setup_logging(config)

        names = [h.get_name() for h in root.handlers]
        assert names.count("gardensim_console") == 1
        assert names.count("gardensim_file") == 1
        assert root.level == logging.DEBUG

        logging.getLogger("gardensim.test").info("hello")
        assert log_file.exists()
    finally:
        for handler in list(root.handlers):
            if handler not in before:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)
