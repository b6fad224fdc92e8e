"""Absolute file paths and the file-level mutation primitives."""

from __future__ import annotations

import os
import stat
import time
from datetime import UTC, datetime, timedelta
from typing import IO, TYPE_CHECKING

from diskpath.constants import FILE_DELETE_RETRY_DELAY
from diskpath.core import attributes as attrs
from diskpath.core import host
from diskpath.core.absolute import AbsolutePath
from diskpath.core.attributes import FileAttributes
from diskpath.core.case import CaseMode
from diskpath.core.digest import content_digest
from diskpath.core.naming import (
    TempNameSource,
    default_temp_names,
    next_unique_name,
)
from diskpath.core.retry import is_transient
from diskpath.core.tmpfile import ScopedTmpFile
from diskpath.exceptions import InvalidPathError, NotAFilePathError
from diskpath.logger import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from diskpath.core.digest import DigestFactory
    from diskpath.core.directory import AbsDir

logger = get_logger(__name__)

_NS_PER_SECOND = 1_000_000_000
_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MICROSECOND = timedelta(microseconds=1)


class AbsFile(AbsolutePath):
    """Absolute path to a file.

    Building a value never touches the disk. Every content operation reads
    or writes the live file at call time.
    """

    __slots__ = ()

    def __init__(self, value: str, *, case_mode: CaseMode | None = None) -> None:
        """Validate ``value`` as a canonical absolute file path.

        Raises:
            InvalidPathError: If ``value`` is not canonical or is a volume root

        """
        super().__init__(value, case_mode=case_mode)
        if self.is_root:
            msg = "a volume root is not a file path"
            raise InvalidPathError(msg, target=value)

    @property
    def parent(self) -> AbsDir:
        """Directory containing the file."""
        parent = super().parent
        if parent is None:
            msg = "a volume root has no parent directory"
            raise InvalidPathError(msg, target=self.path)
        return parent

    def exists(self) -> bool:
        """Return True if a file (not a directory) is at this path."""
        return host.is_file(self.path)

    # -- path helpers ----------------------------------------------------

    def append_suffix(self, text: str) -> AbsFile:
        """Add ``text`` to the end of the path without a separator."""
        return AbsFile(self.path + text, case_mode=self.case_mode)

    def with_extension(self, extension: str) -> AbsFile:
        """Replace the extension; an empty ``extension`` removes it."""
        if extension:
            extension = "." + extension.lstrip(".")
        return self.parent.combine_file(self.stem + extension)

    def replace_end(self, expected_end: str, new_end: str) -> AbsFile:
        """Swap the trailing ``expected_end`` of the path for ``new_end``.

        Raises:
            ValueError: If the path does not end with ``expected_end``

        """
        if not self.path.endswith(expected_end):
            msg = f"Path does not end in {expected_end!r}: {self.path}"
            raise ValueError(msg)
        head = self.path[: len(self.path) - len(expected_end)]
        return AbsFile(head + new_end, case_mode=self.case_mode)

    # -- attributes ------------------------------------------------------

    def attributes(self) -> FileAttributes:
        """Return the file's attribute flags."""
        return attrs.get_attributes(self.path)

    def set_attributes(self, flags: FileAttributes) -> None:
        """Replace the file's attribute flags."""
        attrs.set_attributes(self.path, flags)

    def is_read_only(self) -> bool:
        """Return True if the file carries the read-only flag."""
        return attrs.is_read_only(self.path)

    def clear_read_only(self) -> None:
        """Remove the read-only flag; a missing file is left alone."""
        if self.exists():
            attrs.clear_read_only(self.path)

    # -- delete / move ---------------------------------------------------

    def delete_file(self) -> None:
        """Delete the file, even when it is read-only.

        A missing file is not an error. A transient failure (lock, sharing
        violation) is retried once after a short pause; if the retry fails
        too, the first error is raised.
        """
        self._require_not_directory()
        try:
            self.clear_read_only()
            host.remove_file(self.path)
        except FileNotFoundError:
            return
        except OSError as first:
            if not is_transient(first):
                raise
            logger.debug(
                "Delete of %s failed (%s), retrying once", self.path, first
            )
            time.sleep(FILE_DELETE_RETRY_DELAY)
            try:
                host.remove_file(self.path)
            except FileNotFoundError:
                return
            except OSError:
                raise first from None

    def move(self, target: AbsFile | AbsDir) -> AbsFile:
        """Move the file to ``target`` (a file path or a directory).

        Returns:
            The new location

        Raises:
            FileExistsError: If something already exists at the target

        """
        destination = self._target_file(target)
        if host.exists(destination.path):
            msg = f"Move target already exists: {destination.path}"
            raise FileExistsError(msg)
        destination.parent.create_directory()
        host.move(self.path, destination.path)
        return destination

    # -- content ---------------------------------------------------------

    def read_bytes(self) -> bytes:
        """Return the whole file content."""
        with host.open_read(self.path) as stream:
            return stream.read()

    def read_text(self) -> str:
        """Return the whole file content decoded as UTF-8."""
        return self.read_bytes().decode("utf-8")

    def write_bytes(self, data: bytes) -> None:
        """Atomically replace the file content with ``data``."""
        self.write_stream(lambda stream: stream.write(data))

    def write_text(self, text: str) -> None:
        """Atomically replace the file content with UTF-8 ``text``."""
        self.write_bytes(text.encode("utf-8"))

    def write_bytes_read_only(self, data: bytes) -> None:
        """Atomically write ``data`` and leave the file read-only."""
        self.write_bytes(data)
        self.set_attributes(self.attributes() | FileAttributes.READ_ONLY)

    def write_text_read_only(self, text: str) -> None:
        """Atomically write UTF-8 ``text`` and leave the file read-only."""
        self.write_bytes_read_only(text.encode("utf-8"))

    def write_stream(
        self,
        action: Callable[[IO[bytes]], object],
        *,
        names: TempNameSource | None = None,
    ) -> None:
        """Atomically replace the file with what ``action`` writes.

        ``action`` receives a binary stream on a temporary file next to the
        target. Only after it returns, and the data is flushed to disk, is
        the temporary file renamed over the target; readers see either the
        old content or the new content, never a mix. If ``action`` raises,
        the target is untouched and the temporary file is removed.

        Args:
            action: Callable writing the full content to the stream
            names: Temp name source; defaults to the process-wide one

        """
        self._require_not_directory()
        self.parent.create_directory()

        with self.create_tmp(names=names) as tmp:
            with host.open_write(tmp.path) as stream:
                action(stream)
                stream.flush()
                os.fsync(stream.fileno())
            self._atomic_replace(tmp.file)

    def _atomic_replace(self, tmp: AbsFile) -> None:
        """Rename ``tmp`` over this file, carrying its attributes across.

        Off Windows the permission bits of the old file are copied onto
        ``tmp`` first, so the new content never appears with a wider mode.
        """
        if not self.exists():
            host.replace(tmp.path, self.path)
            return

        if not host.IS_WINDOWS:
            if not host.is_link(self.path):
                mode = stat.S_IMODE(host.stat(self.path).st_mode)
                host.chmod(tmp.path, mode)
            host.replace(tmp.path, self.path)
            return

        snapshot = self.attributes()
        if snapshot == FileAttributes.NORMAL:
            host.replace(tmp.path, self.path)
            return

        self.set_attributes(FileAttributes.NORMAL)
        try:
            host.replace(tmp.path, self.path)
        finally:
            self.set_attributes(snapshot)
        logger.debug("Replaced %s keeping attributes %r", self.path, snapshot)

    # -- naming ----------------------------------------------------------

    def find_tmp(self, *, names: TempNameSource | None = None) -> ScopedTmpFile:
        """Return a scoped ``<name>-<random>-tmp`` path that is free now.

        Nothing is created; another actor may take the name before the
        caller does. Prefer ``create_tmp``.
        """
        names = names or default_temp_names()
        while True:
            candidate = self.append_suffix(names.suffix())
            if not host.exists(candidate.path):
                return ScopedTmpFile(candidate)

    def create_tmp(self, *, names: TempNameSource | None = None) -> ScopedTmpFile:
        """Claim a fresh empty ``<name>-<random>-tmp`` file next to this one."""
        names = names or default_temp_names()
        while True:
            candidate = self.append_suffix(names.suffix())
            try:
                host.create_new(candidate.path)
            except FileExistsError:
                continue
            return ScopedTmpFile(candidate)

    def find_unique(self) -> AbsFile:
        """Return the first free name in the ``name (n).ext`` sequence.

        Compute only: nothing is created, so the name can be taken by
        someone else before it is used. Prefer ``create_unique``.
        """
        candidate = self
        while host.exists(candidate.path):
            candidate = candidate._next_unique()
        return candidate

    def create_unique(self) -> AbsFile:
        """Create and return a new empty file named after this one.

        Tries this name, then ``name (1).ext``, ``name (2).ext`` and so on,
        creating each candidate exclusively. A candidate claimed by someone
        else in the meantime is skipped, never overwritten.
        """
        self.parent.create_directory()

        candidate = self
        while True:
            try:
                host.create_new(candidate.path)
            except FileExistsError:
                candidate = candidate._next_unique()
                continue
            logger.debug("Created unique file %s", candidate.path)
            return candidate

    def _next_unique(self) -> AbsFile:
        return self.parent.combine_file(next_unique_name(self.stem, self.suffix))

    # -- digest ----------------------------------------------------------

    def content_digest(self, algorithm: str | DigestFactory) -> str:
        """Return the uppercase hex digest of the whole file."""
        return content_digest(self.path, algorithm)

    def content_sha1(self) -> str:
        """Return the uppercase hex SHA-1 of the file."""
        return self.content_digest("sha1")

    def content_sha256(self) -> str:
        """Return the uppercase hex SHA-256 of the file."""
        return self.content_digest("sha256")

    # -- timestamps ------------------------------------------------------

    def last_write_time(self) -> datetime:
        """Return the last-write time as an aware UTC datetime."""
        modified_ns = host.stat(self.path).st_mtime_ns
        return datetime.fromtimestamp(modified_ns / _NS_PER_SECOND, tz=UTC)

    def set_last_write_time(self, when: datetime) -> None:
        """Set the last-write time; naive datetimes are taken as UTC."""
        if when.tzinfo is None:
            when = when.replace(tzinfo=UTC)
        modified_ns = (when - _EPOCH) // _ONE_MICROSECOND * 1_000
        host.set_modified_time(self.path, modified_ns)

    def set_last_write_time_from(self, source: AbsFile) -> None:
        """Copy the last-write time of ``source`` if it differs."""
        source_ns = host.stat(source.path).st_mtime_ns
        if host.stat(self.path).st_mtime_ns != source_ns:
            host.set_modified_time(self.path, source_ns)

    def _copy_creation_time_from(self, source: AbsFile) -> None:
        if not host.can_set_creation_time():
            return
        source_ns = host.creation_time_ns(source.path)
        if source_ns is not None and host.creation_time_ns(self.path) != source_ns:
            host.set_creation_time(self.path, source_ns)

    # -- copy ------------------------------------------------------------

    def copy_to(self, target: AbsFile | AbsDir) -> AbsFile:
        """Copy the file, keeping its timestamps and read-only flag.

        An encrypted source is decrypted first and a read-only target is
        made writable, since the host copy refuses either. Creation and
        last-write times are written only when they differ from the target's.

        Args:
            target: Destination file, or a directory to copy into

        Returns:
            The destination file

        """
        destination = self._target_file(target)

        source_flags = self.attributes()
        if source_flags & FileAttributes.ENCRYPTED:
            source_flags &= ~FileAttributes.ENCRYPTED
            self.set_attributes(source_flags)

        destination.clear_read_only()
        host.copy_file(self.path, destination.path)

        source_read_only = bool(source_flags & FileAttributes.READ_ONLY)
        if source_read_only:
            destination.clear_read_only()
        try:
            destination._copy_creation_time_from(self)
            destination.set_last_write_time_from(self)
        finally:
            if source_read_only:
                destination.set_attributes(
                    destination.attributes() | FileAttributes.READ_ONLY
                )

        logger.debug("Copied %s -> %s", self.path, destination.path)
        return destination

    # -- helpers ---------------------------------------------------------

    def _target_file(self, target: AbsFile | AbsDir) -> AbsFile:
        if isinstance(target, AbsFile):
            return target
        return target.combine_file(self.name)

    def _require_not_directory(self) -> None:
        if host.is_dir(self.path) and not host.is_link(self.path):
            msg = "found a directory where a file was expected"
            raise NotAFilePathError(msg, target=self.path)
