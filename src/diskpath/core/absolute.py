"""Shared canonical core of ``AbsFile`` and ``AbsDir``."""

from __future__ import annotations

import functools
import os
from typing import TYPE_CHECKING

from diskpath.core import host
from diskpath.core.base import BasePath
from diskpath.core.case import CaseMode
from diskpath.exceptions import InvalidPathError

if TYPE_CHECKING:
    from diskpath.core.directory import AbsDir


def _strip_trailing_separator(value: str) -> str:
    """Drop one trailing separator unless ``value`` is a bare volume root."""
    if value.endswith(os.sep) and value != host.split_root(value):
        return value[:-1]
    return value


@functools.total_ordering
class AbsolutePath(BasePath):
    """An absolute, normalised path that does not end with a separator.

    Construction is strict: the input must already be canonical. A relative
    path, a ``..`` segment or a doubled separator is refused with
    ``InvalidPathError`` instead of being quietly repaired.

    Attributes:
        path: Canonical path text
        case_mode: Comparison mode used for equality, ordering and prefixes

    """

    __slots__ = ("case_mode",)

    def __init__(self, value: str, *, case_mode: CaseMode | None = None) -> None:
        """Validate ``value`` as a canonical absolute path.

        Args:
            value: Absolute path text; either separator is accepted
            case_mode: Comparison mode; defaults to the host's

        Raises:
            InvalidPathError: If ``value`` is not already canonical

        """
        super().__init__(value)
        self.case_mode = case_mode or CaseMode.host()

        candidate = _strip_trailing_separator(self.path)
        canonical = host.canonicalize(candidate)
        if canonical != candidate and not (
            self.case_mode is CaseMode.INSENSITIVE
            and self.case_mode.equal(canonical, candidate)
        ):
            msg = f"expected a full path, canonical form is {canonical!r}"
            raise InvalidPathError(msg, target=value)
        self.path = canonical

    @classmethod
    def _from_joined(cls, text: str, case_mode: CaseMode):
        """Build a value from host-joined text, canonicalising it first."""
        return cls(host.canonicalize(text), case_mode=case_mode)

    # -- comparison ------------------------------------------------------

    @property
    def _key(self) -> str:
        return self.case_mode.key(self.path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AbsolutePath):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.case_mode is other.case_mode
            and self._key == other._key
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, AbsolutePath):
            return NotImplemented
        return self._key < self.case_mode.key(other.path)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key))

    def __fspath__(self) -> str:
        return self.path

    def starts_with(self, other: AbsolutePath) -> bool:
        """Return True if ``other`` is this path or one of its ancestors.

        The match must end on a component boundary: ``/a/b`` is a prefix
        of ``/a/b/c`` but not of ``/a/bc``.
        """
        mine = self._key
        prefix = self.case_mode.key(other.path)
        if not mine.startswith(prefix):
            return False
        if len(mine) == len(prefix) or prefix.endswith(os.sep):
            return True
        return mine[len(prefix)] == os.sep

    def ends_with(self, text: str) -> bool:
        """Plain string suffix test on the canonical path."""
        return self.path.endswith(text)

    # -- structure -------------------------------------------------------

    @property
    def is_root(self) -> bool:
        """Whether this path is a volume root."""
        return self.path == host.split_root(self.path)

    @property
    def parent(self) -> AbsDir | None:
        """Containing directory, or None for a volume root."""
        if self.is_root:
            return None
        # Import here to avoid circular dependency
        from diskpath.core.directory import AbsDir  # noqa: PLC0415

        return AbsDir(os.path.dirname(self.path), case_mode=self.case_mode)

    def exists(self) -> bool:
        """Query the disk for an entry of this kind."""
        raise NotImplementedError
