"""Centralized constants module for diskpath.

This module is the single source of truth for shared constants. Constants
are grouped by concern and use typing.Final annotations to ensure
immutability.

Usage:
    from diskpath.constants import TMP_NAME_SUFFIX
"""

from typing import Final

# =============================================================================
# Configuration Constants
# =============================================================================

CONFIG_FILE_NAME: Final[str] = "settings.conf"
CONFIG_DIR_NAME: Final[str] = ".config"
DEFAULT_CONFIG_SUBDIR: Final[str] = "diskpath"
CONFIG_DIR_ENV_VAR: Final[str] = "DISKPATH_CONFIG_DIR"

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "WARNING"
DEFAULT_BACKUP_COUNT: Final[int] = 3

# "auto" defers to the probed host behaviour
CASE_SENSITIVE_AUTO: Final[str] = "auto"

SECTION_DEFAULT: Final[str] = "DEFAULT"
SECTION_DELETE: Final[str] = "delete"
SECTION_PATHS: Final[str] = "paths"

KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"
KEY_CASE_SENSITIVE: Final[str] = "case_sensitive"
KEY_LOCKED_RETRY_DELAY: Final[str] = "locked_retry_delay"
KEY_BUSY_RETRY_DELAY: Final[str] = "busy_retry_delay"
KEY_BACKOFF: Final[str] = "backoff"
KEY_MAX_DELAY: Final[str] = "max_delay"
KEY_MAX_ATTEMPTS: Final[str] = "max_attempts"
KEY_VCS_DIR: Final[str] = "vcs_dir"

# =============================================================================
# Retry Constants
# =============================================================================

# Seconds to wait after a lock / access-denied failure during delete
LOCKED_RETRY_DELAY: Final[float] = 0.5

# Seconds to wait after a busy / sharing-violation failure during delete
BUSY_RETRY_DELAY: Final[float] = 3.0

DEFAULT_RETRY_BACKOFF: Final[float] = 1.0
DEFAULT_RETRY_MAX_DELAY: Final[float] = 30.0

# 0 keeps retrying until the directory is gone
UNBOUNDED_ATTEMPTS: Final[int] = 0

# Single file delete retries once after this delay
FILE_DELETE_RETRY_DELAY: Final[float] = 0.5

# =============================================================================
# Naming Constants
# =============================================================================

TMP_NAME_SUFFIX: Final[str] = "-tmp"
TMP_RANDOM_LENGTH: Final[int] = 11
TMP_RANDOM_ALPHABET: Final[str] = "abcdefghijklmnopqrstuvwxyz0123456789"

# Matches "<base> (<n>)" so the next candidate can increment <n>
UNIQUE_SUFFIX_PATTERN: Final[str] = r"^(.*) \(([0-9]+)\)$"
UNIQUE_FIRST_INDEX: Final[int] = 1

DEFAULT_VCS_DIR: Final[str] = ".git"

# =============================================================================
# Digest Constants
# =============================================================================

DIGEST_CHUNK_SIZE: Final[int] = 64 * 1024
DEFAULT_DIGEST_ALGORITHM: Final[str] = "sha1"
SUPPORTED_DIGEST_ALGORITHMS: Final[tuple[str, ...]] = (
    "md5",
    "sha1",
    "sha256",
    "sha512",
)

# =============================================================================
# Manifest Constants
# =============================================================================

MANIFEST_FORMAT_VERSION: Final[str] = "1.0.0"
MANIFEST_ALGORITHM: Final[str] = "sha256"
MANIFEST_FILE_NAME: Final[str] = "manifest.json"

# =============================================================================
# Logging Constants
# =============================================================================

LOG_DIR_ENV_VAR: Final[str] = "DISKPATH_LOG_DIR"
LOG_FILE_NAME: Final[str] = "diskpath.log"
ROOT_LOGGER_NAME: Final[str] = "diskpath"

LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 1024 * 1024  # 1 MB
LOG_BACKUP_COUNT: Final[int] = DEFAULT_BACKUP_COUNT

LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}
