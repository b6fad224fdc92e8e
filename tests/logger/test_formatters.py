"""Tests for console formatters and handler setup."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from diskpath.constants import LOG_COLORS, LOG_CONSOLE_FORMAT
from diskpath.logger import (
    ColoredConsoleFormatter,
    ConfigurationError,
    HybridConsoleFormatter,
    SimpleConsoleFormatter,
)
from diskpath.logger.handlers import _create_file_handler


def _record(level: int, message: str = "Deleted %s") -> logging.LogRecord:
    return logging.LogRecord(
        name="diskpath.core.directory",
        level=level,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=("/tmp/build",),
        exc_info=None,
    )


def test_simple_formatter_shows_message_only():
    """Test the simple formatter drops all metadata."""
    formatted = SimpleConsoleFormatter().format(_record(logging.INFO))

    assert formatted == "Deleted /tmp/build"


def test_colored_formatter_restores_levelname():
    """Test the colour is applied for format() only."""
    record = _record(logging.WARNING)

    formatted = ColoredConsoleFormatter("%(levelname)s %(message)s").format(record)

    assert formatted.startswith(LOG_COLORS["WARNING"])
    assert record.levelname == "WARNING"


def test_hybrid_formatter_by_level():
    """Test INFO stays plain while warnings are structured."""
    formatter = HybridConsoleFormatter(LOG_CONSOLE_FORMAT)

    assert formatter.format(_record(logging.INFO)) == "Deleted /tmp/build"
    warning = formatter.format(_record(logging.WARNING))
    assert "diskpath.core.directory" in warning
    assert "Deleted /tmp/build" in warning


def test_file_handler_level_and_directory(tmp_path: Path):
    """Test the log directory is created and the level applied."""
    log_file = tmp_path / "nested" / "diskpath.log"

    handler = _create_file_handler(log_file, "DEBUG")
    try:
        assert log_file.parent.is_dir()
        assert handler.level == logging.DEBUG
    finally:
        handler.close()


def test_file_handler_failure_is_configuration_error(tmp_path: Path):
    """Test an unopenable log file raises ConfigurationError."""
    with (
        patch(
            "diskpath.logger.handlers.RotatingFileHandler",
            side_effect=PermissionError("denied"),
        ),
        pytest.raises(ConfigurationError, match="Failed to setup file logging"),
    ):
        _create_file_handler(tmp_path / "x.log", "INFO")
