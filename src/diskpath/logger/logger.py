"""Main logger module providing public API functions.

- setup_logging(): configure the root logger behind a QueueListener
- get_logger(): module logger accessor used everywhere in diskpath
- enable_file_logging(): attach the rotating file handler (CLI)
- flush_all_handlers(): wait until queued records reach their handlers
- clear_logger_state(): reset everything (tests only)
"""

import atexit
import contextlib
import logging
import time
from pathlib import Path

from diskpath.constants import ROOT_LOGGER_NAME
from diskpath.logger.config import load_log_settings
from diskpath.logger.handlers import setup_root_logger
from diskpath.logger.state import get_state

_FLUSH_TIMEOUT = 5.0
_FLUSH_POLL_INTERVAL = 0.01
_FLUSH_SETTLE_DELAY = 0.1


def flush_all_handlers() -> None:
    """Flush all handlers behind the QueueListener.

    Waits for the queue to drain (bounded), lets the listener thread finish
    the last record, then flushes each handler.
    """
    state = get_state()
    if state.queue_listener is None or state.log_queue is None:
        return

    # QueueListener doesn't use task_done(), so poll the queue
    start_time = time.monotonic()
    while not state.log_queue.empty():
        if time.monotonic() - start_time > _FLUSH_TIMEOUT:
            break
        time.sleep(_FLUSH_POLL_INTERVAL)

    time.sleep(_FLUSH_SETTLE_DELAY)

    for handler in state.queue_listener.handlers:
        with contextlib.suppress(OSError, ValueError):
            handler.flush()


def _cleanup_logging() -> None:
    """Stop the QueueListener on interpreter exit."""
    state = get_state()
    if state.queue_listener is not None:
        flush_all_handlers()
        state.queue_listener.stop()
        state.queue_listener = None


atexit.register(_cleanup_logging)


def setup_logging(
    name: str = ROOT_LOGGER_NAME,
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
    enable_file_logging: bool = False,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Configure logging and return the named logger.

    The root ``diskpath`` logger is initialized exactly once; child loggers
    such as ``diskpath.core.file`` propagate to it.

    Handler Configuration (via QueueListener):
        - Console: StreamHandler on stderr with hybrid formatting
        - File: RotatingFileHandler, only when ``enable_file_logging``

    Library callers get console-only logging by default; the CLI turns file
    logging on.

    Args:
        name: Logger name, typically __name__
        console_level: Console log level ("DEBUG", "INFO", "WARNING")
        file_level: File log level ("DEBUG", "INFO")
        log_file: Path to log file
        enable_file_logging: Whether to attach the file handler

    Returns:
        Logger instance

    Raises:
        ConfigurationError: If file logging setup fails

    """
    state = get_state()
    with state.lock:
        if not state.root_initialized:
            cfg_console, cfg_file, cfg_path = load_log_settings()
            setup_root_logger(
                state,
                console_level or cfg_console,
                file_level or cfg_file,
                log_file or cfg_path,
                enable_file_logging,
            )

    return logging.getLogger(name)


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get a logger, initializing the root logger on first use.

    Usage:
        >>> from diskpath.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("Deleting %s", path)

    Args:
        name: Logger name, typically __name__

    Returns:
        Logger instance (singleton per name)

    """
    return setup_logging(name=name)


def clear_logger_state() -> None:
    """Clear global logger state for testing purposes.

    Stops the QueueListener, closes and removes handlers on ``diskpath``
    loggers and resets the state flags so the next ``get_logger`` call
    starts from scratch.

    Warning:
        Intended for tests only.

    """
    state = get_state()
    with state.lock:
        if state.queue_listener is not None:
            flush_all_handlers()
            state.queue_listener.stop()
            state.queue_listener = None

        state.log_queue = None
        state.root_initialized = False
        state.config_applied = False
        state.file_logging = False

        for logger_name in list(logging.Logger.manager.loggerDict.keys()):
            if logger_name == ROOT_LOGGER_NAME or logger_name.startswith(
                f"{ROOT_LOGGER_NAME}."
            ):
                log_instance = logging.getLogger(logger_name)
                for handler in log_instance.handlers[:]:
                    handler.close()
                    log_instance.removeHandler(handler)


def enable_file_logging(
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
) -> None:
    """Rebuild the root handlers with the rotating file handler attached.

    Module loggers are created at import time with console-only output;
    the CLI calls this once it has read the settings file.

    Args:
        console_level: Console log level (defaults from settings bootstrap)
        file_level: File log level
        log_file: Path to log file

    Raises:
        ConfigurationError: If file logging setup fails

    """
    state = get_state()
    with state.lock:
        if state.queue_listener is not None:
            flush_all_handlers()
            state.queue_listener.stop()
            state.queue_listener = None

        cfg_console, cfg_file, cfg_path = load_log_settings()
        setup_root_logger(
            state,
            console_level or cfg_console,
            file_level or cfg_file,
            log_file or cfg_path,
            True,  # noqa: FBT003
        )
