"""Empty command handler: clear a directory but keep it."""

from argparse import Namespace

from diskpath.logger import get_logger

from .base import BaseCommandHandler

logger = get_logger(__name__)


class EmptyHandler(BaseCommandHandler):
    """Handler for the empty command."""

    def execute(self, args: Namespace) -> int:
        """Empty ``args.path``, optionally keeping the VCS folder."""
        directory = self.dir_arg(args.path)
        directory.empty_directory(
            preserve_vcs=args.preserve_vcs,
            vcs_dir=self.settings["paths"]["vcs_dir"],
        )
        self.emit({"emptied": directory.path})
        return 0
