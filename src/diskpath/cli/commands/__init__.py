"""Command handlers for the diskpath CLI."""

from .base import BaseCommandHandler
from .config import ConfigHandler
from .copy import CopyHandler
from .delete import DeleteHandler
from .empty import EmptyHandler
from .hash import HashHandler
from .manifest import ManifestHandler
from .relpath import RelpathHandler
from .unique import UniqueHandler
from .write import WriteHandler

__all__ = [
    "BaseCommandHandler",
    "ConfigHandler",
    "CopyHandler",
    "DeleteHandler",
    "EmptyHandler",
    "HashHandler",
    "ManifestHandler",
    "RelpathHandler",
    "UniqueHandler",
    "WriteHandler",
]
