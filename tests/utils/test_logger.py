"""Tests for the application logger utility."""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

import pytest


def _file_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]


@pytest.fixture(autouse=True)
def reset_logger():
    """Reset the logger singleton and logging state between tests."""
    import lockin_beat.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("lockin_beat").handlers.clear()

    yield

    for handler in logging.getLogger("lockin_beat").handlers:
        handler.close()
    logging.getLogger("lockin_beat").handlers.clear()
    logger_mod._logger = None


def test_get_logger_creates_log_file(tmp_path):
    """Logger creates the log file inside user_log_dir."""
    with patch("lockin_beat.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from lockin_beat.utils.logger import get_logger

        logger = get_logger()

    assert (tmp_path / "lockin.log").exists()
    assert isinstance(logger, logging.Logger)
    assert logger.name == "lockin_beat"


def test_get_logger_returns_singleton(tmp_path):
    with patch("lockin_beat.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from lockin_beat.utils.logger import get_logger

        assert get_logger() is get_logger()


def test_get_logger_writes_message(tmp_path):
    """Messages written to the logger appear in the log file."""
    with patch("lockin_beat.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from lockin_beat.utils.logger import get_logger

        logger = get_logger()
        logger.info("session started: %ss", 1800)

    for handler in logger.handlers:
        handler.flush()

    content = (tmp_path / "lockin.log").read_text()
    assert "session started: 1800s" in content
    assert "INFO" in content


def test_get_logger_creates_parent_dirs(tmp_path):
    nested = tmp_path / "a" / "b" / "c"
    with patch("lockin_beat.utils.logger.user_log_dir", return_value=str(nested)):
        from lockin_beat.utils.logger import get_logger

        get_logger()

    assert nested.is_dir()


def test_logger_does_not_propagate(tmp_path):
    with patch("lockin_beat.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from lockin_beat.utils.logger import get_logger

        logger = get_logger()

    assert logger.propagate is False
    assert len(_file_handlers(logger)) == 1


def test_component_logger_shares_file(tmp_path):
    """Component loggers write through the application handler."""
    with patch("lockin_beat.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from lockin_beat.utils.logger import get_logger

        session_log = get_logger("session")
        session_log.info("grace period expired")

    assert session_log.name == "lockin_beat.session"
    for handler in get_logger().handlers:
        handler.flush()
    content = (tmp_path / "lockin.log").read_text()
    assert "[lockin_beat.session] grace period expired" in content


def test_level_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("LOCKIN_LOG_LEVEL", "warning")
    with patch("lockin_beat.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from lockin_beat.utils.logger import get_logger

        assert get_logger().level == logging.WARNING


def test_log_file_path(tmp_path):
    with patch("lockin_beat.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from lockin_beat.utils.logger import log_file_path

        assert log_file_path() == tmp_path / "lockin.log"


def test_file_handler_added_next_to_foreign_handler(tmp_path):
    """A handler attached by someone else does not count as configured."""
    foreign = logging.NullHandler()
    logging.getLogger("lockin_beat").addHandler(foreign)

    with patch("lockin_beat.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from lockin_beat.utils.logger import get_logger

        logger = get_logger()
        logger.warning("still written")

    assert foreign in logger.handlers
    assert len(_file_handlers(logger)) == 1
    for handler in _file_handlers(logger):
        handler.flush()
    assert "still written" in (tmp_path / "lockin.log").read_text()


def test_reconfigure_does_not_duplicate_file_handler(tmp_path):
    import lockin_beat.utils.logger as logger_mod

    with patch("lockin_beat.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger_mod.get_logger()
        logger_mod._logger = None
        logger = logger_mod.get_logger()

    assert len(_file_handlers(logger)) == 1
