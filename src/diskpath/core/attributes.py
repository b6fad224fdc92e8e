"""File attribute flags and their mapping onto the host.

On Windows the flags are the native attribute bits. Elsewhere only
``READ_ONLY`` exists: it is the absence of the owner write bit, and setting
or clearing it toggles every write bit.
"""

from __future__ import annotations

import stat as stat_module
from enum import IntFlag

from diskpath.core import host

_WRITE_BITS = stat_module.S_IWUSR | stat_module.S_IWGRP | stat_module.S_IWOTH
_OWNER_DIR_BITS = stat_module.S_IRWXU


class FileAttributes(IntFlag):
    """Attribute flags, valued like the Windows ``FILE_ATTRIBUTE_*`` bits.

    ``NORMAL`` (no flags) is the default state of a plain file.
    """

    NORMAL = 0
    READ_ONLY = 0x1
    HIDDEN = 0x2
    SYSTEM = 0x4
    ARCHIVE = 0x20
    ENCRYPTED = 0x4000


_KNOWN = (
    FileAttributes.READ_ONLY
    | FileAttributes.HIDDEN
    | FileAttributes.SYSTEM
    | FileAttributes.ARCHIVE
    | FileAttributes.ENCRYPTED
)


def get_attributes(path: str) -> FileAttributes:
    """Return the attribute flags of the file or directory at ``path``."""
    native = host.native_attributes(path)
    if native is not None:
        return FileAttributes(native & _KNOWN)

    mode = host.stat(path).st_mode
    if stat_module.S_ISLNK(mode) or mode & stat_module.S_IWUSR:
        return FileAttributes.NORMAL
    return FileAttributes.READ_ONLY


def set_attributes(path: str, attributes: FileAttributes) -> None:
    """Replace the attribute flags of the entry at ``path``.

    Off Windows, clearing ``READ_ONLY`` on a directory also restores owner
    read and execute so its contents can be listed and removed.
    """
    if host.IS_WINDOWS:
        host.set_native_attributes(path, int(attributes))
        return

    current = host.stat(path)
    mode = current.st_mode
    if stat_module.S_ISLNK(mode):
        return

    permissions = stat_module.S_IMODE(mode)
    if attributes & FileAttributes.READ_ONLY:
        updated = permissions & ~_WRITE_BITS
    elif stat_module.S_ISDIR(mode):
        updated = permissions | _OWNER_DIR_BITS
    else:
        updated = permissions | stat_module.S_IWUSR

    if updated != permissions:
        host.chmod(path, updated)


def is_read_only(path: str) -> bool:
    """Return True if the entry at ``path`` carries ``READ_ONLY``."""
    return bool(get_attributes(path) & FileAttributes.READ_ONLY)


def clear_read_only(path: str) -> None:
    """Remove ``READ_ONLY`` from the entry at ``path`` if it is set."""
    attributes = get_attributes(path)
    if attributes & FileAttributes.READ_ONLY:
        set_attributes(path, attributes & ~FileAttributes.READ_ONLY)


def clear_non_normal(path: str) -> None:
    """Reset the entry at ``path`` to ``NORMAL`` if it carries any flag.

    Off Windows a directory without full owner permissions is also reset,
    since a missing read or execute bit blocks a recursive delete as much
    as a missing write bit does.
    """
    attributes = get_attributes(path)
    if attributes != FileAttributes.NORMAL:
        set_attributes(path, FileAttributes.NORMAL)
        return
    if not host.IS_WINDOWS:
        mode = host.stat(path).st_mode
        if stat_module.S_ISDIR(mode) and (mode & _OWNER_DIR_BITS) != _OWNER_DIR_BITS:
            set_attributes(path, FileAttributes.NORMAL)
