"""CLI runner for diskpath.

Orchestrates the execution of CLI commands by routing parsed
arguments to the appropriate command handlers.
"""

import sys
from argparse import Namespace
from pathlib import Path

from diskpath import __version__
from diskpath.cli.commands import (
    BaseCommandHandler,
    ConfigHandler,
    CopyHandler,
    DeleteHandler,
    EmptyHandler,
    HashHandler,
    ManifestHandler,
    RelpathHandler,
    UniqueHandler,
    WriteHandler,
)
from diskpath.cli.parser import CLIParser
from diskpath.config import SettingsManager
from diskpath.exceptions import DiskPathError
from diskpath.logger import enable_file_logging, get_logger

logger = get_logger(__name__)


class CLIRunner:
    """CLI command runner and orchestrator."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize CLI runner with shared dependencies.

        Args:
            config_dir: Settings directory override

        """
        self.settings_manager = SettingsManager(config_dir)
        self.settings = self.settings_manager.load()
        self._init_command_handlers()

    def _init_command_handlers(self) -> None:
        handler_types: dict[str, type[BaseCommandHandler]] = {
            "hash": HashHandler,
            "copy": CopyHandler,
            "delete": DeleteHandler,
            "empty": EmptyHandler,
            "unique": UniqueHandler,
            "write": WriteHandler,
            "relpath": RelpathHandler,
            "manifest": ManifestHandler,
            "config": ConfigHandler,
        }
        self.command_handlers = {
            name: handler(self.settings_manager, self.settings)
            for name, handler in handler_types.items()
        }

    def setup_logging(self, *, verbose: bool = False) -> None:
        """Attach file logging with the levels from the settings file."""
        console_level = "DEBUG" if verbose else self.settings["console_log_level"]
        enable_file_logging(
            console_level=console_level,
            file_level=self.settings["log_level"],
        )

    def run(self, argv: list[str] | None = None) -> int:
        """Run the CLI application.

        Parses arguments, handles global flags, validates commands,
        and routes to the appropriate handler.

        Args:
            argv: Arguments to parse; defaults to ``sys.argv[1:]``

        Returns:
            Process exit code

        """
        parser = CLIParser(self.settings)
        args = parser.parse_args(argv)

        if args.version:
            print(__version__)
            return 0

        if not args.command:
            print("❌ No command specified. Use --help.", file=sys.stderr)
            return 2

        self.setup_logging(verbose=args.verbose)
        return self._execute_command(args)

    def _execute_command(self, args: Namespace) -> int:
        handler = self.command_handlers[args.command]
        logger.debug("Running %s command", args.command)
        try:
            return handler.execute(args)
        except DiskPathError as e:
            logger.error("%s", e)  # noqa: TRY400
            print(f"❌ {e}", file=sys.stderr)
            return 1
        except (OSError, ValueError) as e:
            logger.error("%s failed: %s", args.command, e)  # noqa: TRY400
            print(f"❌ {e}", file=sys.stderr)
            return 1
