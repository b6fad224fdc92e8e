"""Typed filesystem paths with hardened file operations.

Path kind is part of the type: ``AbsFile`` and ``AbsDir`` for absolute
paths, ``RelFile`` and ``RelDir`` for relative ones. On top of the values
sit atomic writes, retrying deletes, collision-safe naming and
attribute-preserving copies.
"""

from importlib.metadata import PackageNotFoundError, version

from diskpath.core import (
    AbsDir,
    AbsFile,
    CaseMode,
    FileAttributes,
    RelDir,
    RelFile,
    RetryPolicy,
    ScopedTmpFile,
    TempNameSource,
    concat,
    relativize,
    resolve,
)

try:
    __version__ = version("diskpath")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"

__all__ = [
    "AbsDir",
    "AbsFile",
    "CaseMode",
    "FileAttributes",
    "RelDir",
    "RelFile",
    "RetryPolicy",
    "ScopedTmpFile",
    "TempNameSource",
    "__version__",
    "concat",
    "relativize",
    "resolve",
]
