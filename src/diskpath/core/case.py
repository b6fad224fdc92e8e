"""Comparison mode for path equality, ordering and prefix tests."""

from __future__ import annotations

import functools
import os
import sys
import tempfile
from enum import Enum

from diskpath.logger import get_logger

logger = get_logger(__name__)

_PROBE_PREFIX = "DiskPathCaseProbe-"


class CaseMode(Enum):
    """Whether path strings compare case-sensitively.

    Attributes:
        SENSITIVE: ``/a/B`` and ``/a/b`` are different paths
        INSENSITIVE: ``/a/B`` and ``/a/b`` are the same path

    """

    SENSITIVE = "sensitive"
    INSENSITIVE = "insensitive"

    def key(self, text: str) -> str:
        """Return the comparison key for ``text`` under this mode."""
        if self is CaseMode.INSENSITIVE:
            return text.casefold()
        return text

    def equal(self, left: str, right: str) -> bool:
        """Compare two path strings under this mode."""
        return self.key(left) == self.key(right)

    @classmethod
    def host(cls) -> CaseMode:
        """Return the case sensitivity of the host, probed once per process."""
        return _detect_host_case_mode()

    @classmethod
    def from_setting(cls, value: str) -> CaseMode:
        """Map a ``case_sensitive`` setting (auto/true/false) to a mode.

        Raises:
            ValueError: If the value is not recognised

        """
        normalized = value.strip().lower()
        if normalized == "auto":
            return cls.host()
        if normalized in {"true", "yes", "1", "on"}:
            return cls.SENSITIVE
        if normalized in {"false", "no", "0", "off"}:
            return cls.INSENSITIVE
        msg = f"case_sensitive must be auto, true or false, got {value!r}"
        raise ValueError(msg)


def _platform_default() -> CaseMode:
    if sys.platform in {"win32", "darwin"}:
        return CaseMode.INSENSITIVE
    return CaseMode.SENSITIVE


@functools.cache
def _detect_host_case_mode() -> CaseMode:
    """Probe the temp directory with a mixed-case file name."""
    try:
        with tempfile.NamedTemporaryFile(prefix=_PROBE_PREFIX) as probe:
            swapped = os.path.join(
                os.path.dirname(probe.name),
                os.path.basename(probe.name).swapcase(),
            )
            mode = (
                CaseMode.INSENSITIVE
                if os.path.exists(swapped)
                else CaseMode.SENSITIVE
            )
    except OSError as e:
        mode = _platform_default()
        logger.debug("Case probe failed (%s), assuming %s", e, mode.value)
    return mode
