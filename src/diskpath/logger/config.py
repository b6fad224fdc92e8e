"""Configuration loading and updating for the logging system.

Bootstrap values come from constants and the environment; settings file
levels are applied afterwards, through a late import of the config package
to keep the logger importable from every module.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from diskpath.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    LOG_DIR_ENV_VAR,
    LOG_FILE_NAME,
)

if TYPE_CHECKING:
    from diskpath.logger.state import _LoggerState


def load_log_settings() -> tuple[str, str, Path]:
    """Load default console level, file level, and file path.

    Environment Variable Override:
        DISKPATH_LOG_DIR: directory for ``diskpath.log``. Tests point it at a
        temporary directory so they never touch the user's log.

    Returns:
        Tuple of (console_level, file_level, log_path)

    """
    env_log_dir = os.getenv(LOG_DIR_ENV_VAR)
    if env_log_dir:
        log_path = Path(env_log_dir).expanduser() / LOG_FILE_NAME
    else:
        log_path = (
            Path.home()
            / CONFIG_DIR_NAME
            / DEFAULT_CONFIG_SUBDIR
            / "logs"
            / LOG_FILE_NAME
        )

    return DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, log_path


def update_logger_from_config(
    state: "_LoggerState", config_dir: Path | None = None
) -> None:
    """Update handler levels from the settings file.

    Only levels change; handlers are never added or removed here.

    Args:
        state: Logger state object (from logger.state module)
        config_dir: Optional settings directory override

    """
    # Import here to avoid circular dependency
    from diskpath.config import SettingsManager  # noqa: PLC0415

    settings = SettingsManager(config_dir).load()

    console_level = getattr(
        logging, settings["console_log_level"], logging.WARNING
    )
    file_level = getattr(logging, settings["log_level"], logging.INFO)

    if state.queue_listener is not None:
        for handler in state.queue_listener.handlers:
            if isinstance(handler, RotatingFileHandler):
                handler.setLevel(file_level)
            elif isinstance(handler, logging.StreamHandler):
                handler.setLevel(console_level)

    state.config_applied = True
