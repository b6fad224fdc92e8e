"""Copy command handler for files and directory trees."""

from argparse import Namespace

from diskpath.core import host
from diskpath.logger import get_logger

from .base import BaseCommandHandler

logger = get_logger(__name__)


class CopyHandler(BaseCommandHandler):
    """Handler for the copy command.

    A directory source is copied recursively into the target directory. A
    file source is copied to the target file, or into the target when it
    is an existing directory.
    """

    def execute(self, args: Namespace) -> int:
        """Copy ``args.source`` to ``args.target``."""
        source_dir = self.dir_arg(args.source)
        if source_dir.exists():
            target_dir = self.dir_arg(args.target)
            copied = source_dir.copy_directory(target_dir)
            logger.info("Copied %d files to %s", copied, target_dir)
            self.emit(
                {
                    "source": source_dir.path,
                    "target": target_dir.path,
                    "files": copied,
                }
            )
            return 0

        source = self.file_arg(args.source)
        if host.is_dir(args.target):
            destination = source.copy_to(self.dir_arg(args.target))
        else:
            destination = source.copy_to(self.file_arg(args.target))
        self.emit({"source": source.path, "target": destination.path, "files": 1})
        return 0
