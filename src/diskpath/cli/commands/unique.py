"""Unique command handler: find or claim a collision-free file name."""

from argparse import Namespace

from .base import BaseCommandHandler


class UniqueHandler(BaseCommandHandler):
    """Handler for the unique command."""

    def execute(self, args: Namespace) -> int:
        """Print the first free name in the ``name (n).ext`` run."""
        file = self.file_arg(args.path)
        result = file.create_unique() if args.create else file.find_unique()
        self.emit({"path": result.path, "created": bool(args.create)})
        return 0
