"""Scoped temporary files."""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

from diskpath.logger import get_logger

if TYPE_CHECKING:
    import types

    from diskpath.core.file import AbsFile

logger = get_logger(__name__)


class ScopedTmpFile:
    """An ``AbsFile`` that is deleted at the end of a ``with`` block.

    Moving the file away before the block ends is the commit: the scope
    only removes what is still at the path.

    Example:
        >>> with target.create_tmp() as tmp:
        ...     tmp.file.write_bytes(payload)  # doctest: +SKIP
        ...     tmp.file.move(target)          # doctest: +SKIP

    """

    def __init__(self, file: AbsFile) -> None:
        """Bind the scope to ``file``."""
        self.file = file

    @property
    def path(self) -> str:
        """Path text of the temporary file."""
        return self.file.path

    def dispose(self) -> None:
        """Delete the file if it is still there."""
        if self.file.exists():
            self.file.delete_file()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.dispose()
            return
        # Never let cleanup hide the error that ended the scope
        try:
            self.dispose()
        except OSError as e:
            logger.warning("Failed to remove temporary file %s: %s", self.path, e)

    def __repr__(self) -> str:
        return f"ScopedTmpFile({self.path!r})"
