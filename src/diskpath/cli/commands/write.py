"""Write command handler: atomically replace a file with stdin."""

import sys
from argparse import Namespace

from diskpath.logger import get_logger

from .base import BaseCommandHandler

logger = get_logger(__name__)


class WriteHandler(BaseCommandHandler):
    """Handler for the write command."""

    def execute(self, args: Namespace) -> int:
        """Copy stdin into ``args.path`` through a temporary file."""
        file = self.file_arg(args.path)
        data = sys.stdin.buffer.read()
        if args.read_only:
            file.write_bytes_read_only(data)
        else:
            file.write_bytes(data)
        logger.info("Wrote %d bytes to %s", len(data), file)
        self.emit({"path": file.path, "bytes": len(data)})
        return 0
