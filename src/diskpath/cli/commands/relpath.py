"""Relpath command handler."""

from argparse import Namespace

from diskpath.core import host, relativize

from .base import BaseCommandHandler


class RelpathHandler(BaseCommandHandler):
    """Handler for the relpath command."""

    def execute(self, args: Namespace) -> int:
        """Print ``args.path`` relative to ``args.root``."""
        root = self.dir_arg(args.root)
        if host.is_dir(args.path):
            child = self.dir_arg(args.path)
        else:
            child = self.file_arg(args.path)
        relative = relativize(child, root)
        self.emit({"relative": relative.path, "posix": relative.as_posix()})
        return 0
