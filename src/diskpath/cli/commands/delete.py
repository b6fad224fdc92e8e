"""Delete command handler for files and directory trees."""

import dataclasses
from argparse import Namespace

from diskpath.core import host
from diskpath.logger import get_logger

from .base import BaseCommandHandler

logger = get_logger(__name__)


class DeleteHandler(BaseCommandHandler):
    """Handler for the delete command."""

    def execute(self, args: Namespace) -> int:
        """Delete ``args.path``; a missing path is not an error."""
        if host.is_dir(args.path) and not host.is_link(args.path):
            directory = self.dir_arg(args.path)
            if args.force:
                directory.delete_dir_read_only()
            else:
                policy = dataclasses.replace(
                    self.settings_manager.retry_policy(self.settings),
                    max_attempts=args.max_attempts,
                )
                directory.delete_dir(policy)
            target = directory.path
        else:
            file = self.file_arg(args.path)
            file.delete_file()
            target = file.path

        logger.info("Deleted %s", target)
        self.emit({"deleted": target})
        return 0
