"""Logging formatters for console output.

- ColoredConsoleFormatter: ANSI colour on the level name
- SimpleConsoleFormatter: message only
- HybridConsoleFormatter: simple for INFO, coloured and structured otherwise
"""

import logging

from diskpath.constants import LOG_COLORS


class ColoredConsoleFormatter(logging.Formatter):
    """Console formatter with ANSI color support for different log levels.

    The level name is swapped for its coloured form only for the duration
    of ``format()``; the record is restored before returning.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with a coloured level name.

        Args:
            record: The log record to format

        Returns:
            Formatted log message with ANSI color codes for the level name

        """
        color = LOG_COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        original_levelname = record.levelname
        record.levelname = f"{color}{original_levelname}{LOG_COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


class SimpleConsoleFormatter(logging.Formatter):
    """Console formatter that only shows the message content."""

    def format(self, record: logging.LogRecord) -> str:
        """Return the rendered message without metadata."""
        return record.getMessage()


class HybridConsoleFormatter(logging.Formatter):
    """Console formatter with simple format for INFO, structured for others.

    CLI commands report results at INFO, so those lines stay clean, while
    retries, warnings and errors keep timestamp, logger and level.

    Example Output:
        INFO:     "Copied 12 files"
        WARNING:  "12:30:45 - diskpath.core.directory - WARNING - Retrying"
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
    ) -> None:
        """Initialize hybrid formatter with structured format template.

        Args:
            fmt: Format string for structured messages
            datefmt: Date format string for timestamps

        """
        super().__init__(fmt, datefmt)
        self._simple_formatter = SimpleConsoleFormatter()
        self._colored_formatter = ColoredConsoleFormatter(fmt, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        """Format log record using simple or structured format by level."""
        if record.levelno == logging.INFO:
            return self._simple_formatter.format(record)
        return self._colored_formatter.format(record)
