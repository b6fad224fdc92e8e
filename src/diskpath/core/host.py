"""Host filesystem boundary.

Every call the path types make into the operating system goes through the
functions in this module. They are thin wrappers over ``os`` and
``shutil`` (plus a little ``ctypes`` on Windows for attributes and creation
times) and carry no policy: retries, attribute juggling and sequencing
belong to the callers. Tests patch these functions to inject failures.
"""

from __future__ import annotations

import os
import shutil
import sys
from typing import IO, TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

IS_WINDOWS = sys.platform == "win32"

# Windows FILETIME counts 100ns ticks since 1601-01-01
_EPOCH_AS_FILETIME = 116444736000000000
_FILE_WRITE_ATTRIBUTES = 0x100
_FILE_SHARE_ALL = 0x1 | 0x2 | 0x4
_OPEN_EXISTING = 3
_FILE_FLAG_BACKUP_SEMANTICS = 0x02000000
_FILE_ATTRIBUTE_NORMAL = 0x80


# =============================================================================
# Queries
# =============================================================================


def exists(path: str) -> bool:
    """Return True if anything (file, directory or link) is at ``path``."""
    return os.path.lexists(path)


def is_file(path: str) -> bool:
    """Return True if ``path`` is an existing non-directory entry."""
    return os.path.lexists(path) and not os.path.isdir(path)


def is_dir(path: str) -> bool:
    """Return True if ``path`` is an existing directory."""
    return os.path.isdir(path)


def is_link(path: str) -> bool:
    """Return True if ``path`` is a symbolic link."""
    return os.path.islink(path)


def stat(path: str) -> os.stat_result:
    """Return stat information without following a final symlink."""
    return os.stat(path, follow_symlinks=False)


def scan(path: str) -> Iterator[os.DirEntry[str]]:
    """Yield the entries of one directory."""
    with os.scandir(path) as entries:
        yield from entries


def canonicalize(path: str) -> str:
    """Return the absolute, normalized form of ``path`` (no disk access)."""
    return os.path.abspath(path)


def split_root(path: str) -> str:
    """Return the volume root of ``path`` (``"/"``, ``"C:\\"``) or ``""``."""
    drive, rest = os.path.splitdrive(path)
    if rest.startswith(os.sep):
        return drive + os.sep
    return drive


def current_directory() -> str:
    """Return the process working directory."""
    return os.getcwd()


def home_directory() -> str:
    """Return the user's home directory."""
    return os.path.expanduser("~")


# =============================================================================
# Mutations
# =============================================================================


def make_dirs(path: str) -> None:
    """Create ``path`` and any missing parents; existing is fine."""
    os.makedirs(path, exist_ok=True)


def create_new(path: str) -> None:
    """Create an empty file, failing with FileExistsError if taken."""
    with open(path, "xb"):
        pass


def open_read(path: str) -> IO[bytes]:
    """Open ``path`` for binary reading."""
    return open(path, "rb")  # noqa: SIM115


def open_write(path: str) -> IO[bytes]:
    """Open ``path`` for binary writing, truncating it."""
    return open(path, "wb")  # noqa: SIM115


def remove_file(path: str) -> None:
    """Delete one file or link."""
    os.remove(path)


def remove_dir(path: str) -> None:
    """Delete one empty directory."""
    os.rmdir(path)


def remove_tree(path: str) -> None:
    """Delete a directory and everything below it."""
    shutil.rmtree(path)


def replace(source: str, target: str) -> None:
    """Rename ``source`` over ``target`` (overwriting, same volume)."""
    os.replace(source, target)


def move(source: str, target: str) -> None:
    """Move ``source`` to ``target``, across volumes if needed."""
    shutil.move(source, target)


def copy_file(source: str, target: str) -> None:
    """Copy content and permission bits, overwriting ``target``."""
    shutil.copy(source, target)


def chmod(path: str, mode: int) -> None:
    """Set permission bits on ``path``."""
    os.chmod(path, mode)


def set_modified_time(path: str, modified_ns: int) -> None:
    """Set the last-write time, keeping the current access time."""
    accessed_ns = os.stat(path).st_atime_ns
    os.utime(path, ns=(accessed_ns, modified_ns))


# =============================================================================
# Host specific metadata
# =============================================================================


def native_attributes(path: str) -> int | None:
    """Return the Windows attribute word, or None on other hosts."""
    if not IS_WINDOWS:
        return None
    return os.stat(path, follow_symlinks=False).st_file_attributes


def set_native_attributes(path: str, attributes: int) -> None:
    """Set the Windows attribute word.

    Raises:
        NotImplementedError: On hosts without attribute words
        OSError: If the host call fails

    """
    if not IS_WINDOWS:
        msg = "native attributes are only available on Windows"
        raise NotImplementedError(msg)

    import ctypes  # noqa: PLC0415

    kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
    value = attributes or _FILE_ATTRIBUTE_NORMAL
    if not kernel32.SetFileAttributesW(path, value):
        raise ctypes.WinError(ctypes.get_last_error())


def creation_time_ns(path: str) -> int | None:
    """Return the creation time in ns, or None if the host lacks one."""
    result = os.stat(path)
    birth = getattr(result, "st_birthtime_ns", None)
    if birth is not None:
        return birth
    if IS_WINDOWS:
        return result.st_ctime_ns
    return None


def can_set_creation_time() -> bool:
    """Return True if the host allows writing creation timestamps."""
    return IS_WINDOWS


def set_creation_time(path: str, created_ns: int) -> None:
    """Set the creation timestamp (Windows only).

    Raises:
        NotImplementedError: On hosts where creation time is read-only
        OSError: If the host call fails

    """
    if not IS_WINDOWS:
        msg = "creation time cannot be set on this host"
        raise NotImplementedError(msg)

    import ctypes  # noqa: PLC0415
    from ctypes import wintypes  # noqa: PLC0415

    kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
    kernel32.CreateFileW.restype = wintypes.HANDLE
    kernel32.CreateFileW.argtypes = [
        wintypes.LPCWSTR,
        wintypes.DWORD,
        wintypes.DWORD,
        wintypes.LPVOID,
        wintypes.DWORD,
        wintypes.DWORD,
        wintypes.HANDLE,
    ]
    filetime_pointer = ctypes.POINTER(wintypes.FILETIME)
    kernel32.SetFileTime.argtypes = [
        wintypes.HANDLE,
        filetime_pointer,
        filetime_pointer,
        filetime_pointer,
    ]
    kernel32.CloseHandle.argtypes = [wintypes.HANDLE]
    handle = kernel32.CreateFileW(
        path,
        _FILE_WRITE_ATTRIBUTES,
        _FILE_SHARE_ALL,
        None,
        _OPEN_EXISTING,
        _FILE_FLAG_BACKUP_SEMANTICS,
        None,
    )
    if handle in (None, ctypes.c_void_p(-1).value):
        raise ctypes.WinError(ctypes.get_last_error())
    try:
        ticks = created_ns // 100 + _EPOCH_AS_FILETIME
        created = wintypes.FILETIME(ticks & 0xFFFFFFFF, ticks >> 32)
        if not kernel32.SetFileTime(handle, ctypes.byref(created), None, None):
            raise ctypes.WinError(ctypes.get_last_error())
    finally:
        kernel32.CloseHandle(handle)
