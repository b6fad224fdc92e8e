"""Logging utilities for diskpath.

Structured logging with:
- Coloured console output (hybrid: plain INFO, structured warnings/errors)
- Optional file rotation using RotatingFileHandler
- QueueHandler/QueueListener so callers never block on handler I/O
- Hierarchical names (diskpath.core.file, diskpath.cli.runner, ...)

Architecture:
    Module logger → QueueHandler → Queue → QueueListener thread
                                                ↓
                                      Console (+ File) handlers

Usage:
    >>> from diskpath.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Copied %d files", count)  # %-style, never f-strings

Environment Variables:
    DISKPATH_LOG_DIR: directory for the log file (tests use a tmp dir)

Rules for contributors:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Never attach handlers to child loggers; only the ``diskpath`` root
       logger has one (the QueueHandler)
    4. Use %-formatting in log calls
"""

from diskpath.logger.config import (
    update_logger_from_config as _update_config,
)
from diskpath.logger.formatters import (
    ColoredConsoleFormatter,
    HybridConsoleFormatter,
    SimpleConsoleFormatter,
)
from diskpath.logger.handlers import ConfigurationError
from diskpath.logger.logger import (
    clear_logger_state,
    enable_file_logging,
    flush_all_handlers,
    get_logger,
    setup_logging,
)
from diskpath.logger.state import get_state

__all__ = [
    "ColoredConsoleFormatter",
    "ConfigurationError",
    "HybridConsoleFormatter",
    "SimpleConsoleFormatter",
    "clear_logger_state",
    "enable_file_logging",
    "flush_all_handlers",
    "get_logger",
    "setup_logging",
    "update_logger_from_config",
]


def update_logger_from_config(config_dir=None) -> None:
    """Apply settings file log levels to the running handlers.

    Args:
        config_dir: Optional settings directory override

    """
    _update_config(get_state(), config_dir)
