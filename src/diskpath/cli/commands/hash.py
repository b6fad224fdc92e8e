"""Hash command handler: print the content digest of one file."""

from argparse import Namespace

from .base import BaseCommandHandler


class HashHandler(BaseCommandHandler):
    """Handler for the hash command."""

    def execute(self, args: Namespace) -> int:
        """Digest ``args.path`` with ``args.algorithm``."""
        file = self.file_arg(args.path)
        digest = file.content_digest(args.algorithm)
        self.emit(
            {"path": file.path, "algorithm": args.algorithm, "digest": digest}
        )
        return 0
