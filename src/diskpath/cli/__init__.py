"""Command-line interface for diskpath."""

from diskpath.cli.parser import CLIParser
from diskpath.cli.runner import CLIRunner

__all__ = ["CLIParser", "CLIRunner"]
