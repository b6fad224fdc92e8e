"""Settings manager for the INI configuration file."""

import configparser
import os
from datetime import UTC, datetime
from pathlib import Path

from diskpath.constants import (
    BUSY_RETRY_DELAY,
    CASE_SENSITIVE_AUTO,
    CONFIG_DIR_ENV_VAR,
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_RETRY_BACKOFF,
    DEFAULT_RETRY_MAX_DELAY,
    DEFAULT_VCS_DIR,
    KEY_BACKOFF,
    KEY_BUSY_RETRY_DELAY,
    KEY_CASE_SENSITIVE,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_LOCKED_RETRY_DELAY,
    KEY_LOG_LEVEL,
    KEY_MAX_ATTEMPTS,
    KEY_MAX_DELAY,
    KEY_VCS_DIR,
    LOCKED_RETRY_DELAY,
    SECTION_DEFAULT,
    SECTION_DELETE,
    SECTION_PATHS,
    UNBOUNDED_ATTEMPTS,
)
from diskpath.core.case import CaseMode
from diskpath.core.file import AbsFile
from diskpath.core.retry import RetryPolicy
from diskpath.logger import get_logger
from diskpath.types import DeleteConfig, DiskSettings, PathsConfig

logger = get_logger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_SECTION_COMMENTS = {
    SECTION_DEFAULT: "# Logging and path comparison\n",
    SECTION_DELETE: (
        "\n# Directory delete retries while another process holds a lock.\n"
        "# Delays are in seconds; max_attempts = 0 retries until success.\n"
    ),
    SECTION_PATHS: "\n# Path handling\n",
}

_KEY_COMMENTS = {
    KEY_LOG_LEVEL: "# DEBUG, INFO, WARNING, ERROR, CRITICAL",
    KEY_CONSOLE_LOG_LEVEL: "# level shown on the terminal",
    KEY_CASE_SENSITIVE: "# auto, true or false",
    KEY_LOCKED_RETRY_DELAY: "# wait after access denied",
    KEY_BUSY_RETRY_DELAY: "# wait after any other contention",
    KEY_VCS_DIR: "# folder kept by 'empty --preserve-vcs'",
}


def default_config_dir() -> Path:
    """Return the settings directory, honouring ``DISKPATH_CONFIG_DIR``."""
    env_dir = os.getenv(CONFIG_DIR_ENV_VAR)
    if env_dir:
        return Path(env_dir).expanduser()
    return Path.home() / CONFIG_DIR_NAME / DEFAULT_CONFIG_SUBDIR


def default_settings() -> DiskSettings:
    """Return the built-in settings."""
    return DiskSettings(
        log_level=DEFAULT_LOG_LEVEL,
        console_log_level=DEFAULT_CONSOLE_LOG_LEVEL,
        case_sensitive=CASE_SENSITIVE_AUTO,
        delete=DeleteConfig(
            locked_retry_delay=LOCKED_RETRY_DELAY,
            busy_retry_delay=BUSY_RETRY_DELAY,
            backoff=DEFAULT_RETRY_BACKOFF,
            max_delay=DEFAULT_RETRY_MAX_DELAY,
            max_attempts=UNBOUNDED_ATTEMPTS,
        ),
        paths=PathsConfig(vcs_dir=DEFAULT_VCS_DIR),
    )


class SettingsManager:
    """Reads and writes ``settings.conf``.

    Values missing from the file fall back to the built-in defaults. A
    missing file is not an error; ``save`` creates it.
    """

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize the manager.

        Args:
            config_dir: Settings directory (defaults to
                ``$DISKPATH_CONFIG_DIR`` or ``~/.config/diskpath``)

        """
        self.config_dir = Path(config_dir) if config_dir else default_config_dir()
        self.settings_file = self.config_dir / CONFIG_FILE_NAME

    def _parser(self) -> configparser.ConfigParser:
        defaults = default_settings()
        config = configparser.ConfigParser(
            inline_comment_prefixes=("#", ";"),
            interpolation=None,
        )
        config.read_dict(
            {
                SECTION_DEFAULT: {
                    KEY_LOG_LEVEL: defaults["log_level"],
                    KEY_CONSOLE_LOG_LEVEL: defaults["console_log_level"],
                    KEY_CASE_SENSITIVE: defaults["case_sensitive"],
                },
                SECTION_DELETE: {
                    key: str(value) for key, value in defaults["delete"].items()
                },
                SECTION_PATHS: dict(defaults["paths"]),
            }
        )
        return config

    def load(self) -> DiskSettings:
        """Load settings from the file over the defaults.

        Returns:
            Effective settings

        Raises:
            ValueError: If a value cannot be parsed; the message names the key

        """
        config = self._parser()
        if self.settings_file.exists():
            config.read(self.settings_file, encoding="utf-8")
            logger.debug("Loaded settings from %s", self.settings_file)

        delete = config[SECTION_DELETE]
        settings = DiskSettings(
            log_level=_level(config, KEY_LOG_LEVEL),
            console_log_level=_level(config, KEY_CONSOLE_LOG_LEVEL),
            case_sensitive=config.get(SECTION_DEFAULT, KEY_CASE_SENSITIVE),
            delete=DeleteConfig(
                locked_retry_delay=_number(delete, KEY_LOCKED_RETRY_DELAY, float),
                busy_retry_delay=_number(delete, KEY_BUSY_RETRY_DELAY, float),
                backoff=_number(delete, KEY_BACKOFF, float),
                max_delay=_number(delete, KEY_MAX_DELAY, float),
                max_attempts=_number(delete, KEY_MAX_ATTEMPTS, int),
            ),
            paths=PathsConfig(vcs_dir=config.get(SECTION_PATHS, KEY_VCS_DIR)),
        )
        # Validate eagerly so a bad file fails at load time
        self.case_mode(settings)
        try:
            self.retry_policy(settings)
        except ValueError as e:
            msg = f"[{SECTION_DELETE}] {e}"
            raise ValueError(msg) from e
        return settings

    def save(self, settings: DiskSettings) -> None:
        """Write ``settings`` to the file atomically, with comments."""
        lines = [
            "# diskpath configuration\n",
            f"# Last updated: {datetime.now(tz=UTC).isoformat()}\n\n",
            _SECTION_COMMENTS[SECTION_DEFAULT],
            f"[{SECTION_DEFAULT}]\n",
        ]
        lines += _entries(
            {
                KEY_LOG_LEVEL: settings["log_level"],
                KEY_CONSOLE_LOG_LEVEL: settings["console_log_level"],
                KEY_CASE_SENSITIVE: settings["case_sensitive"],
            }
        )
        lines += [_SECTION_COMMENTS[SECTION_DELETE], f"[{SECTION_DELETE}]\n"]
        lines += _entries(settings["delete"])
        lines += [_SECTION_COMMENTS[SECTION_PATHS], f"[{SECTION_PATHS}]\n"]
        lines += _entries(settings["paths"])

        target = AbsFile(os.path.abspath(self.settings_file))
        target.write_text("".join(lines))
        logger.info("Saved settings to %s", target)

    @staticmethod
    def retry_policy(settings: DiskSettings) -> RetryPolicy:
        """Build the delete retry policy described by ``settings``."""
        delete = settings["delete"]
        return RetryPolicy(
            locked_delay=delete["locked_retry_delay"],
            busy_delay=delete["busy_retry_delay"],
            backoff=delete["backoff"],
            max_delay=delete["max_delay"],
            max_attempts=delete["max_attempts"],
        )

    @staticmethod
    def case_mode(settings: DiskSettings) -> CaseMode:
        """Build the comparison mode described by ``settings``."""
        return CaseMode.from_setting(settings["case_sensitive"])


def _entries(values: dict[str, object]) -> list[str]:
    lines = []
    for key, value in values.items():
        comment = _KEY_COMMENTS.get(key)
        if comment:
            lines.append(f"{key} = {value}  {comment}\n")
        else:
            lines.append(f"{key} = {value}\n")
    return lines


def _level(config: configparser.ConfigParser, key: str) -> str:
    value = config.get(SECTION_DEFAULT, key).strip().upper()
    if value not in _LOG_LEVELS:
        msg = f"{key} must be one of {', '.join(_LOG_LEVELS)}, got {value!r}"
        raise ValueError(msg)
    return value


def _number(section: configparser.SectionProxy, key: str, kind: type) -> float:
    raw = section.get(key)
    try:
        return kind(raw)
    except ValueError as e:
        msg = f"{key} must be a {kind.__name__}, got {raw!r}"
        raise ValueError(msg) from e
