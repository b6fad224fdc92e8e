"""Candidate names for unique and temporary files."""

from __future__ import annotations

import random
import re

from diskpath.constants import (
    TMP_NAME_SUFFIX,
    TMP_RANDOM_ALPHABET,
    TMP_RANDOM_LENGTH,
    UNIQUE_FIRST_INDEX,
    UNIQUE_SUFFIX_PATTERN,
)

_UNIQUE_SUFFIX = re.compile(UNIQUE_SUFFIX_PATTERN)


def next_unique_name(stem: str, suffix: str) -> str:
    """Return the file name that follows ``stem + suffix`` in a collision run.

    ``report.txt`` is followed by ``report (1).txt``, which is followed by
    ``report (2).txt``, and so on.

    Args:
        stem: File name without extension
        suffix: Extension including the dot, or ""

    Returns:
        The next candidate file name

    """
    match = _UNIQUE_SUFFIX.match(stem)
    if match:
        base, number = match.group(1), int(match.group(2))
        return f"{base} ({number + 1}){suffix}"
    return f"{stem} ({UNIQUE_FIRST_INDEX}){suffix}"


class TempNameSource:
    """Source of random suffixes for ``<name>-<random>-tmp`` temp files.

    Pass a seeded ``random.Random`` to make the sequence reproducible.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        """Initialize with an explicit generator or a fresh one."""
        self._rng = rng or random.Random()

    def token(self) -> str:
        """Return one random token."""
        return "".join(
            self._rng.choice(TMP_RANDOM_ALPHABET)
            for _ in range(TMP_RANDOM_LENGTH)
        )

    def suffix(self) -> str:
        """Return the text appended to a file name to make a temp name."""
        return f"-{self.token()}{TMP_NAME_SUFFIX}"


_default_source = TempNameSource()


def default_temp_names() -> TempNameSource:
    """Return the process-scoped temp name source."""
    return _default_source
