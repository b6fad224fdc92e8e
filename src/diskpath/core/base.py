"""Separator normalisation and name decomposition shared by all path types."""

from __future__ import annotations

import os

_SEPARATORS = ("/", "\\")


def normalize_separators(value: str) -> str:
    """Replace every ``/`` and ``\\`` with the platform separator."""
    for separator in _SEPARATORS:
        if separator != os.sep:
            value = value.replace(separator, os.sep)
    return value


class BasePath:
    """A path string with platform separators and name helpers.

    Attributes:
        path: The normalised path text

    """

    __slots__ = ("path",)

    def __init__(self, value: str) -> None:
        """Normalise ``value`` and store it."""
        self.path = normalize_separators(value)

    @property
    def name(self) -> str:
        """Final path component."""
        return os.path.basename(self.path)

    @property
    def stem(self) -> str:
        """Final path component without its extension."""
        return os.path.splitext(self.name)[0]

    @property
    def suffix(self) -> str:
        """Extension of the final component, including the dot."""
        return os.path.splitext(self.name)[1]

    def __str__(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"
