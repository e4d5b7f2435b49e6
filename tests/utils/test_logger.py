"""Tests for the application logger utility.

Handlers are looked up by type: a test runner may attach its own capture
handlers to the same logger.
"""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def reset_logger():
    """Reset the logger singleton and logging state between tests."""
    import focusforge.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("focusforge").handlers.clear()
    yield
    logger_mod._logger = None
    logging.getLogger("focusforge").handlers.clear()


def _own_handlers(logger, kind):
    return [h for h in logger.handlers if type(h) is kind]


def test_get_logger_creates_log_file(tmp_path):
    """Logger creates the log file inside user_log_dir."""
    with patch("focusforge.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from focusforge.utils.logger import get_logger

        logger = get_logger()
        logger.info("hello")

    (handler,) = _own_handlers(logger, logging.handlers.RotatingFileHandler)
    handler.flush()
    log_file = tmp_path / "focusforge.log"
    assert log_file.exists()
    assert "hello" in log_file.read_text(encoding="utf-8")


def test_get_logger_is_singleton(tmp_path):
    with patch("focusforge.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from focusforge.utils.logger import get_logger

        first = get_logger()
        assert get_logger() is first
        assert len(_own_handlers(first, logging.handlers.RotatingFileHandler)) == 1


def test_file_handler_added_alongside_foreign_handlers(tmp_path):
    foreign = logging.StreamHandler()
    logging.getLogger("focusforge").addHandler(foreign)

    with patch("focusforge.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from focusforge.utils.logger import get_logger

        logger = get_logger()

    assert foreign in logger.handlers
    assert len(_own_handlers(logger, logging.handlers.RotatingFileHandler)) == 1


def test_logger_does_not_propagate(tmp_path):
    with patch("focusforge.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from focusforge.utils.logger import get_logger

        assert get_logger().propagate is False


def test_unwritable_log_dir_falls_back_to_null_handler(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with patch("focusforge.utils.logger.user_log_dir", return_value=str(blocker / "logs")):
        from focusforge.utils.logger import get_logger

        logger = get_logger()

    assert len(_own_handlers(logger, logging.NullHandler)) == 1
    assert _own_handlers(logger, logging.handlers.RotatingFileHandler) == []
