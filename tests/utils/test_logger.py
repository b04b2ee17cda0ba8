"""Tests for the application logger."""

import logging
from unittest.mock import patch

from focusflow_cli.utils import logger as logger_mod


def _fresh_logger(log_dir):
    logger_mod._logger = None
    logging.getLogger("focusflow_cli").handlers.clear()
    with patch("focusflow_cli.utils.logger.user_log_dir", return_value=str(log_dir)):
        return logger_mod.get_logger()


def test_log_file_created_in_user_log_dir(tmp_path):
    logger = _fresh_logger(tmp_path / "nested" / "logs")
    assert (tmp_path / "nested" / "logs" / "focusflow.log").exists()
    assert logger.name == "focusflow_cli"


def test_singleton(tmp_path):
    first = _fresh_logger(tmp_path)
    assert logger_mod.get_logger() is first
    assert len(first.handlers) == 1


def test_messages_reach_file(tmp_path):
    logger = _fresh_logger(tmp_path)
    logger.debug("engine tick %d", 3)
    for handler in logger.handlers:
        handler.flush()
    content = (tmp_path / "focusflow.log").read_text(encoding="utf-8")
    assert "engine tick 3" in content
    assert "[focusflow_cli]" in content


def test_does_not_propagate_to_root(tmp_path):
    assert _fresh_logger(tmp_path).propagate is False


def test_level_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("FOCUSFLOW_LOG_LEVEL", "warning")
    assert _fresh_logger(tmp_path).level == logging.WARNING


def test_unknown_level_falls_back_to_debug(tmp_path, monkeypatch):
    monkeypatch.setenv("FOCUSFLOW_LOG_LEVEL", "chatty")
    assert _fresh_logger(tmp_path).level == logging.DEBUG
