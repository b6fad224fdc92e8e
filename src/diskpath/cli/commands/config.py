"""Config command handler: show or initialize ``settings.conf``."""

from argparse import Namespace

from diskpath.logger import get_logger

from .base import BaseCommandHandler

logger = get_logger(__name__)


class ConfigHandler(BaseCommandHandler):
    """Handler for config command operations."""

    def execute(self, args: Namespace) -> int:
        """Print the effective settings, writing them first with --init."""
        if args.init:
            self.settings_manager.save(self.settings)
        self.emit(
            {
                "settings_file": str(self.settings_manager.settings_file),
                "settings": self.settings,
            }
        )
        return 0
