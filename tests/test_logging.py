"""
Tests for logging configuration module.
"""

import logging
import sys
import tempfile
from pathlib import Path

import pytest

from reflist.common import vlog
from reflist.logging_config import (
    ColoredFormatter,
    get_logger,
    setup_logging,
)


def make_record(level=logging.INFO, msg="Test message"):
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestSetupLogging:
    """Test logging setup and configuration."""

    def test_setup_logging_default(self):
        """Test default logging setup."""
        logger = setup_logging()
        assert logger.name == "reflist"
        assert logger.level == logging.INFO

    def test_setup_logging_verbose(self):
        """Test verbose logging enables DEBUG level."""
        logger = setup_logging(verbose=True)
        assert logger.level == logging.DEBUG

    def test_console_handler_uses_stderr(self):
        """Test diagnostics never go to stdout, which carries the table."""
        logger = setup_logging()
        streams = [
            h.stream for h in logger.handlers
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        ]
        assert streams == [sys.stderr]

    def test_setup_logging_with_file(self):
        """Test logging to file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / "sub" / "test.log"
            logger = setup_logging(log_file=str(log_file))

            logger.info("Test message")
            for handler in logger.handlers:
                handler.flush()

            assert log_file.exists()
            assert "Test message" in log_file.read_text()

            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    def test_setup_logging_custom_level(self):
        logger = setup_logging(level="WARNING")
        assert logger.level == logging.WARNING

    def test_setup_logging_replaces_handlers(self):
        """Test repeated setup does not stack handlers."""
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_does_not_propagate(self):
        """Test records are not duplicated through the root logger."""
        assert setup_logging().propagate is False


class TestGetLogger:
    """Test logger retrieval."""

    def test_get_logger_returns_instance(self):
        assert isinstance(get_logger(), logging.Logger)

    def test_get_logger_singleton(self):
        assert get_logger() is get_logger()


class TestColoredFormatter:
    """Test colored log formatter."""

    def test_with_colors(self):
        formatter = ColoredFormatter("%(levelname_colored)s %(message)s", use_colors=True)
        formatted = formatter.format(make_record())
        assert "Test message" in formatted
        assert "\033[" in formatted

    def test_without_colors(self):
        formatter = ColoredFormatter("%(levelname_colored)s %(message)s", use_colors=False)
        assert formatter.format(make_record(logging.ERROR)) == "error: Test message"

    def test_all_levels(self):
        formatter = ColoredFormatter("%(levelname_colored)s", use_colors=True)
        for level in [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL]:
            assert formatter.format(make_record(level))


@pytest.fixture
def captured(caplog):
    """Attach caplog directly to the non-propagating reflist logger."""
    logger = setup_logging(level="INFO")
    logger.addHandler(caplog.handler)
    yield caplog
    logger.removeHandler(caplog.handler)


class TestVlog:
    """Test vlog routing through the logger."""

    def test_vlog_verbose(self, captured):
        vlog("Test vlog message", verbose=True)
        assert "Test vlog message" in captured.text

    def test_vlog_quiet_without_verbose(self, captured, monkeypatch):
        monkeypatch.delenv("REFLIST_DEBUG", raising=False)
        vlog("Should not appear", verbose=False)
        assert "Should not appear" not in captured.text

    def test_vlog_debug_env(self, captured, monkeypatch):
        monkeypatch.setenv("REFLIST_DEBUG", "1")
        vlog("Debug env message")
        assert "Debug env message" in captured.text
