"""Base command handler for diskpath CLI commands.

This module provides the abstract base class that all command handlers
inherit from. It turns user-typed paths (possibly relative to the working
directory) into absolute path values and writes JSON results to stdout.
"""

import os
import sys
from abc import ABC, abstractmethod
from argparse import Namespace
from typing import Any

import orjson

from diskpath.config import SettingsManager
from diskpath.core import AbsDir, AbsFile, CaseMode
from diskpath.logger import get_logger
from diskpath.types import DiskSettings

logger = get_logger(__name__)


class BaseCommandHandler(ABC):
    """Abstract base class for all command handlers.

    CLIRunner creates the settings manager and the loaded settings and
    injects them into every handler.
    """

    def __init__(
        self,
        settings_manager: SettingsManager,
        settings: DiskSettings,
    ) -> None:
        """Initialize the command handler with shared dependencies.

        Args:
            settings_manager: Settings file access
            settings: Effective settings

        """
        self.settings_manager = settings_manager
        self.settings = settings
        self.case_mode: CaseMode = settings_manager.case_mode(settings)

    @abstractmethod
    def execute(self, args: Namespace) -> int:
        """Execute the command with the given arguments.

        Args:
            args: Parsed command-line arguments

        Returns:
            Process exit code

        """

    def file_arg(self, text: str) -> AbsFile:
        """Build an ``AbsFile`` from a command-line path."""
        return AbsFile(os.path.abspath(text), case_mode=self.case_mode)

    def dir_arg(self, text: str) -> AbsDir:
        """Build an ``AbsDir`` from a command-line path."""
        return AbsDir(os.path.abspath(text), case_mode=self.case_mode)

    @staticmethod
    def emit(payload: Any) -> None:  # noqa: ANN401
        """Write ``payload`` to stdout as indented JSON."""
        sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode())
        sys.stdout.write("\n")
        sys.stdout.flush()
