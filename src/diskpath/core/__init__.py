"""Path values and the file operations built on them."""

from diskpath.core.algebra import concat, relativize, resolve
from diskpath.core.attributes import FileAttributes
from diskpath.core.case import CaseMode
from diskpath.core.directory import AbsDir
from diskpath.core.file import AbsFile
from diskpath.core.naming import TempNameSource
from diskpath.core.relative import RelativePath, RelDir, RelFile
from diskpath.core.retry import RetryPolicy
from diskpath.core.tmpfile import ScopedTmpFile

__all__ = [
    "AbsDir",
    "AbsFile",
    "CaseMode",
    "FileAttributes",
    "RelDir",
    "RelFile",
    "RelativePath",
    "RetryPolicy",
    "ScopedTmpFile",
    "TempNameSource",
    "concat",
    "relativize",
    "resolve",
]
