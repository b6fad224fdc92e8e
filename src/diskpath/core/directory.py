"""Absolute directory paths: enumeration, copy and the two delete policies."""

from __future__ import annotations

import fnmatch
import os
from typing import TYPE_CHECKING

from diskpath.constants import DEFAULT_VCS_DIR
from diskpath.core import attributes as attrs
from diskpath.core import host
from diskpath.core.absolute import AbsolutePath
from diskpath.core.base import normalize_separators
from diskpath.core.case import CaseMode
from diskpath.core.file import AbsFile
from diskpath.core.retry import DEFAULT_RETRY_POLICY
from diskpath.exceptions import NotADirectoryPathError
from diskpath.logger import get_logger

if TYPE_CHECKING:
    import threading
    from collections.abc import Iterator

    from diskpath.core.retry import RetryPolicy

logger = get_logger(__name__)


def _sub_path(part: str) -> str:
    """Treat ``part`` as relative: normalise and trim outer separators."""
    return normalize_separators(part).strip(os.sep)


class AbsDir(AbsolutePath):
    """Absolute path to a directory.

    The value holds no listing; every query reads the live disk.
    """

    __slots__ = ()

    @classmethod
    def current(cls, *, case_mode: CaseMode | None = None) -> AbsDir:
        """Return the process working directory."""
        return cls(host.current_directory(), case_mode=case_mode)

    @classmethod
    def home(cls, *, case_mode: CaseMode | None = None) -> AbsDir:
        """Return the user's home directory."""
        return cls(host.home_directory(), case_mode=case_mode)

    @property
    def name(self) -> str:
        """Final component; the full path for a volume root."""
        if self.is_root:
            return self.path
        return super().name

    def exists(self) -> bool:
        """Return True if a directory is at this path."""
        return host.is_dir(self.path)

    # -- combination -----------------------------------------------------

    def _joined(self, parts: tuple[str, ...]) -> str:
        path = self.path
        for part in parts:
            path = os.path.join(path, _sub_path(part))
        return path

    def combine_dir(self, *parts: str) -> AbsDir:
        """Append ``parts`` (each taken as relative) and return a directory."""
        return AbsDir(self._joined(parts), case_mode=self.case_mode)

    def combine_file(self, *parts: str) -> AbsFile:
        """Append ``parts`` (each taken as relative) and return a file."""
        return AbsFile(self._joined(parts), case_mode=self.case_mode)

    def combine_relative(self, text: str) -> AbsDir:
        """Join a relative ``text``; an absolute ``text`` is used as is."""
        text = normalize_separators(text)
        if os.path.isabs(text):
            return AbsDir(text, case_mode=self.case_mode)
        return self.combine_dir(text)

    # -- enumeration -----------------------------------------------------

    def list_files(
        self, pattern: str = "*", *, recursive: bool = False
    ) -> Iterator[AbsFile]:
        """Yield files whose name matches ``pattern``.

        Symbolic links are listed as files and never descended into. A
        missing directory yields nothing.
        """
        for entry, is_directory in self._walk(recursive=recursive):
            if not is_directory and self._matches(entry.name, pattern):
                yield AbsFile(entry.path, case_mode=self.case_mode)

    def list_directories(
        self, pattern: str = "*", *, recursive: bool = False
    ) -> Iterator[AbsDir]:
        """Yield subdirectories whose name matches ``pattern``."""
        for entry, is_directory in self._walk(recursive=recursive):
            if is_directory and self._matches(entry.name, pattern):
                yield AbsDir(entry.path, case_mode=self.case_mode)

    def _matches(self, name: str, pattern: str) -> bool:
        return fnmatch.fnmatchcase(
            self.case_mode.key(name), self.case_mode.key(pattern)
        )

    def _walk(
        self, *, recursive: bool
    ) -> Iterator[tuple[os.DirEntry[str], bool]]:
        pending = [self.path]
        while pending:
            current = pending.pop()
            try:
                entries = list(host.scan(current))
            except FileNotFoundError:
                continue
            except NotADirectoryError:
                continue
            for entry in entries:
                is_directory = entry.is_dir(follow_symlinks=False)
                yield entry, is_directory
                if recursive and is_directory:
                    pending.append(entry.path)

    # -- creation and copy -----------------------------------------------

    def create_directory(self) -> None:
        """Create the directory and its parents; existing is fine."""
        host.make_dirs(self.path)

    def empty_directory(
        self, *, preserve_vcs: bool = False, vcs_dir: str = DEFAULT_VCS_DIR
    ) -> None:
        """Delete everything inside the directory, keeping the directory.

        A missing directory is created instead.

        Args:
            preserve_vcs: Keep ``vcs_dir`` folders and everything below them
            vcs_dir: Name of the version control folder to keep

        """
        if not self.exists():
            self.create_directory()
            return

        for file in self.list_files(recursive=True):
            if preserve_vcs and self._under_vcs(file, vcs_dir):
                continue
            file.delete_file()

        for directory in self.list_directories():
            if preserve_vcs and self.case_mode.equal(directory.name, vcs_dir):
                continue
            directory.delete_dir_read_only()

    def _under_vcs(self, path: AbsolutePath, vcs_dir: str) -> bool:
        relative = path.path[len(self.path) :].strip(os.sep)
        return any(
            self.case_mode.equal(part, vcs_dir)
            for part in relative.split(os.sep)[:-1]
        )

    def copy_directory(self, target: AbsDir) -> int:
        """Copy the tree into ``target``, keeping file times and flags.

        Returns:
            Number of files copied

        """
        copied = 0
        target.create_directory()
        for file in self.list_files():
            file.copy_to(target.combine_file(file.name))
            copied += 1
        for directory in self.list_directories():
            copied += directory.copy_directory(target.combine_dir(directory.name))
        return copied

    def move(self, target: AbsDir) -> AbsDir:
        """Move the directory to ``target``.

        Raises:
            FileExistsError: If something already exists at the target

        """
        if host.exists(target.path):
            msg = f"Move target already exists: {target.path}"
            raise FileExistsError(msg)
        host.move(self.path, target.path)
        return target

    # -- delete ----------------------------------------------------------

    def delete_empty_dir(self) -> None:
        """Remove the directory, which must be empty."""
        host.remove_dir(self.path)

    def delete_dir(
        self,
        policy: RetryPolicy | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        """Delete the directory tree, waiting out locks held by others.

        The recursive delete is repeated until the directory is gone. With
        the default policy this never gives up; pass a bounded
        ``RetryPolicy`` or a ``cancel`` event to allow an exit.

        Raises:
            NotADirectoryPathError: If a file is at this path
            TransientIOError: If the policy bound is hit or ``cancel`` fires
            OSError: For any failure that is not contention

        """
        self._require_not_file()
        policy = policy or DEFAULT_RETRY_POLICY
        policy.run(
            lambda: host.remove_tree(self.path),
            done=lambda: not self.exists(),
            target=self.path,
            cancel=cancel,
        )

    def delete_dir_read_only(self) -> None:
        """Delete the tree even where entries are marked read-only.

        A plain recursive delete is tried first. If the directory survives,
        the tree is walked depth first, clearing flags before each delete.
        Entries that vanish during the walk count as deleted.

        Raises:
            NotADirectoryPathError: If a file is at this path

        """
        self._require_not_file()
        try:
            host.remove_tree(self.path)
        except FileNotFoundError:
            return
        except OSError as e:
            logger.debug(
                "Plain delete of %s failed (%s), clearing flags", self.path, e
            )

        if not self.exists():
            return
        self._force_delete()

    def _force_delete(self) -> None:
        try:
            attrs.clear_non_normal(self.path)
            for directory in list(self.list_directories()):
                directory._force_delete()
            for file in list(self.list_files()):
                file.delete_file()
            host.remove_dir(self.path)
        except FileNotFoundError:
            return

    def _require_not_file(self) -> None:
        if host.is_file(self.path):
            msg = "found a file where a directory was expected"
            raise NotADirectoryPathError(msg, target=self.path)
