"""Conversions between absolute and relative paths.

``relativize`` strips a root directory off a path below it, ``resolve``
joins a relative path onto a root and ``concat`` chains two relative
paths. Each keeps the file/directory kind of its right-hand argument.
"""

from __future__ import annotations

import os
from typing import overload

from diskpath.core import host
from diskpath.core.directory import AbsDir
from diskpath.core.file import AbsFile
from diskpath.core.relative import RelDir, RelFile
from diskpath.exceptions import NotUnderRootError


@overload
def relativize(child: AbsFile, root: AbsDir) -> RelFile: ...
@overload
def relativize(child: AbsDir, root: AbsDir) -> RelDir: ...
def relativize(child: AbsFile | AbsDir, root: AbsDir) -> RelFile | RelDir:
    """Return ``child`` relative to ``root``.

    Args:
        child: Path strictly below ``root``
        root: Directory to strip off

    Returns:
        ``RelFile`` for a file, ``RelDir`` for a directory

    Raises:
        NotUnderRootError: If ``child`` is ``root`` itself or not below it,
            including a mere string prefix such as ``/data`` and
            ``/database``

    """
    root_parts = _components(root.path)
    child_parts = _components(child.path)
    if len(child_parts) <= len(root_parts) or not child.starts_with(root):
        msg = f"not below {root.path!r}"
        raise NotUnderRootError(msg, target=child.path)

    # Drop whole components: case folding may change the text length
    remainder = os.sep.join(child_parts[len(root_parts) :])
    if isinstance(child, AbsFile):
        return RelFile(remainder)
    return RelDir(remainder)


@overload
def resolve(root: AbsDir, rel: RelFile) -> AbsFile: ...
@overload
def resolve(root: AbsDir, rel: RelDir) -> AbsDir: ...
def resolve(root: AbsDir, rel: RelFile | RelDir) -> AbsFile | AbsDir:
    """Join ``rel`` onto ``root`` without touching the disk.

    The result takes the case mode of ``root``.
    """
    joined = os.path.join(root.path, rel.path)
    if isinstance(rel, RelFile):
        return AbsFile._from_joined(joined, root.case_mode)
    return AbsDir._from_joined(joined, root.case_mode)


@overload
def concat(head: RelDir, tail: RelFile) -> RelFile: ...
@overload
def concat(head: RelDir, tail: RelDir) -> RelDir: ...
def concat(head: RelDir, tail: RelFile | RelDir) -> RelFile | RelDir:
    """Append ``tail`` below ``head``."""
    if isinstance(tail, RelFile):
        return head.join_file(tail)
    return head.join_dir(tail)


def _components(path: str) -> list[str]:
    """Split an absolute path into its components below the volume root."""
    return [part for part in path[len(host.split_root(path)) :].split(os.sep) if part]
