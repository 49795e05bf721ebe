"""Tests for the loguru sinks set up by configure_logging."""

from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from advocate_diary.cli import app
from advocate_diary.config import LOG_FILE_ENV_VAR
from advocate_diary.logging_config import configure_logging


def test_log_file_records_debug_without_verbose(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "diary.log"

    configure_logging(log_file=log_file)
    logger.debug("Loaded {} cases", 3)
    logger.remove()

    text = log_file.read_text(encoding="utf-8")
    assert "DEBUG" in text
    assert "Loaded 3 cases" in text


def test_no_log_file_by_default(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    configure_logging(verbose=True)
    logger.info("Diary purged")
    logger.remove()

    assert list(tmp_path.iterdir()) == []


def test_cli_log_file_from_environment(tmp_path: Path) -> None:
    log_file = tmp_path / "diary.log"
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["purge", "--yes", "--data-dir", str(tmp_path / "data")],
        env={LOG_FILE_ENV_VAR: str(log_file)},
    )
    logger.remove()

    assert result.exit_code == 0, result.output
    assert "Diary purged" in log_file.read_text(encoding="utf-8")
