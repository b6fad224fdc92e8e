"""Relative paths: values with no disk identity until resolved."""

from __future__ import annotations

import os

from diskpath.core.base import BasePath
from diskpath.exceptions import InvalidPathError


class RelativePath(BasePath):
    """A normalised, never-rooted, non-empty relative path.

    Equality is exact string equality; a relative path has no host to ask
    about case sensitivity until it is resolved.
    """

    __slots__ = ()

    def __init__(self, value: str) -> None:
        """Normalise ``value`` and reject rooted or empty input.

        Raises:
            InvalidPathError: If ``value`` starts with a separator, carries
                a drive, or is empty

        """
        super().__init__(value)
        if self.path.startswith(os.sep):
            msg = "relative paths can't start with a separator"
            raise InvalidPathError(msg, target=value)
        if os.path.splitdrive(self.path)[0]:
            msg = "relative paths can't carry a drive"
            raise InvalidPathError(msg, target=value)
        self.path = self.path.rstrip(os.sep)
        if not self.path:
            msg = "relative paths can't be empty"
            raise InvalidPathError(msg, target=value)

    @property
    def parent(self) -> RelDir | None:
        """Containing relative directory, or None for a single component."""
        head = os.path.dirname(self.path)
        if not head:
            return None
        return RelDir(head)

    @property
    def parts(self) -> tuple[str, ...]:
        """Path components in order."""
        return tuple(self.path.split(os.sep))

    def starts_with(self, text: str) -> bool:
        """Plain string prefix test on the normalised path."""
        return self.path.startswith(text)

    def as_posix(self) -> str:
        """Return the path with ``/`` separators."""
        return "/".join(self.parts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RelativePath):
            return NotImplemented
        return type(self) is type(other) and self.path == other.path

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.path))


class RelFile(RelativePath):
    """Relative path to a file; resolves to an ``AbsFile``."""

    __slots__ = ()

    def append_suffix(self, text: str) -> RelFile:
        """Add ``text`` to the end of the path without a separator."""
        return RelFile(self.path + text)


class RelDir(RelativePath):
    """Relative path to a directory; resolves to an ``AbsDir``."""

    __slots__ = ()

    def join_file(self, *parts: str | RelFile) -> RelFile:
        """Append ``parts`` below this directory and return a file path."""
        return RelFile(_join(self.path, parts))

    def join_dir(self, *parts: str | RelDir) -> RelDir:
        """Append ``parts`` below this directory and return a directory."""
        return RelDir(_join(self.path, parts))


def _join(head: str, parts: tuple[str | RelativePath, ...]) -> str:
    path = head
    for part in parts:
        text = part.path if isinstance(part, RelativePath) else part
        text = RelativePath(text).path
        path = os.path.join(path, text)
    return path
