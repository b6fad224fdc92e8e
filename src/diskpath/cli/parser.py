"""CLI argument parser for diskpath.

Handles parsing of command-line arguments and provides a clean
interface for defining CLI commands and their options.
"""

import argparse
from argparse import Namespace

from diskpath.constants import (
    DEFAULT_DIGEST_ALGORITHM,
    MANIFEST_ALGORITHM,
    SUPPORTED_DIGEST_ALGORITHMS,
)
from diskpath.types import DiskSettings


class CLIParser:
    """Command-line argument parser for diskpath."""

    def __init__(self, settings: DiskSettings) -> None:
        """Initialize the CLI parser with the loaded settings.

        Args:
            settings: Effective settings, used for option defaults

        """
        self.settings = settings

    def parse_args(self, argv: list[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments to parse; defaults to ``sys.argv[1:]``

        Returns:
            Parsed arguments namespace

        """
        parser = self.build()
        return parser.parse_args(argv)

    def build(self) -> argparse.ArgumentParser:
        """Return the fully configured parser."""
        parser = self._create_main_parser()
        self._add_global_options(parser)
        self._add_subcommands(parser)
        return parser

    def _create_main_parser(self) -> argparse.ArgumentParser:
        return argparse.ArgumentParser(
            prog="diskpath",
            description="Typed path and file operations",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Digest a file
  %(prog)s hash report.pdf --algorithm sha256

  # Replace a file atomically from stdin
  generate-report | %(prog)s write out/report.txt

  # Delete a tree, giving up after 5 contended attempts
  %(prog)s delete build --max-attempts 5

  # Record and later check a directory tree
  %(prog)s manifest dist --output dist.manifest.json
  %(prog)s manifest dist --verify dist.manifest.json
            """,
        )

    def _add_global_options(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--version",
            action="store_true",
            help="Show diskpath version and exit",
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show debug logging on the console",
        )

    def _add_subcommands(self, parser: argparse.ArgumentParser) -> None:
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands"
        )

        self._add_hash_command(subparsers)
        self._add_copy_command(subparsers)
        self._add_delete_command(subparsers)
        self._add_empty_command(subparsers)
        self._add_unique_command(subparsers)
        self._add_write_command(subparsers)
        self._add_relpath_command(subparsers)
        self._add_manifest_command(subparsers)
        self._add_config_command(subparsers)

    def _add_hash_command(self, subparsers) -> None:
        hash_parser = subparsers.add_parser(
            "hash", help="Print the content digest of a file"
        )
        hash_parser.add_argument("path", help="File to digest")
        hash_parser.add_argument(
            "--algorithm",
            choices=SUPPORTED_DIGEST_ALGORITHMS,
            default=DEFAULT_DIGEST_ALGORITHM,
            help="Digest algorithm (default: %(default)s)",
        )

    def _add_copy_command(self, subparsers) -> None:
        copy_parser = subparsers.add_parser(
            "copy",
            help="Copy a file or directory keeping times and read-only flags",
        )
        copy_parser.add_argument("source", help="File or directory to copy")
        copy_parser.add_argument(
            "target",
            help="Destination; an existing directory receives the file",
        )

    def _add_delete_command(self, subparsers) -> None:
        delete_parser = subparsers.add_parser(
            "delete",
            help="Delete a file or directory tree",
            epilog="""
Without --force a locked tree is retried until it can be deleted.
--force clears read-only flags and walks the tree instead.
            """,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        delete_parser.add_argument("path", help="File or directory to delete")
        delete_parser.add_argument(
            "--force",
            action="store_true",
            help="Delete read-only entries too",
        )
        delete_parser.add_argument(
            "--max-attempts",
            type=int,
            default=self.settings["delete"]["max_attempts"],
            help="Give up after this many contended attempts (0 = never)",
        )

    def _add_empty_command(self, subparsers) -> None:
        empty_parser = subparsers.add_parser(
            "empty", help="Delete the contents of a directory"
        )
        empty_parser.add_argument("path", help="Directory to empty")
        empty_parser.add_argument(
            "--preserve-vcs",
            action="store_true",
            help=(
                "Keep the version control folder "
                f"({self.settings['paths']['vcs_dir']})"
            ),
        )

    def _add_unique_command(self, subparsers) -> None:
        unique_parser = subparsers.add_parser(
            "unique",
            help="Print a free name based on PATH, e.g. 'name (1).ext'",
        )
        unique_parser.add_argument("path", help="Desired file name")
        unique_parser.add_argument(
            "--create",
            action="store_true",
            help="Claim the name by creating an empty file",
        )

    def _add_write_command(self, subparsers) -> None:
        write_parser = subparsers.add_parser(
            "write", help="Atomically replace a file with stdin"
        )
        write_parser.add_argument("path", help="File to write")
        write_parser.add_argument(
            "--read-only",
            action="store_true",
            help="Mark the file read-only after writing",
        )

    def _add_relpath_command(self, subparsers) -> None:
        relpath_parser = subparsers.add_parser(
            "relpath", help="Print PATH relative to ROOT"
        )
        relpath_parser.add_argument("path", help="Path below ROOT")
        relpath_parser.add_argument("root", help="Root directory")

    def _add_manifest_command(self, subparsers) -> None:
        manifest_parser = subparsers.add_parser(
            "manifest", help="Build or verify a digest manifest of a tree"
        )
        manifest_parser.add_argument("root", help="Directory to scan")
        group = manifest_parser.add_mutually_exclusive_group()
        group.add_argument(
            "--output", help="Save the manifest to this file"
        )
        group.add_argument(
            "--verify", help="Compare the tree with this saved manifest"
        )
        manifest_parser.add_argument(
            "--algorithm",
            choices=SUPPORTED_DIGEST_ALGORITHMS,
            default=MANIFEST_ALGORITHM,
            help="Digest algorithm for new manifests (default: %(default)s)",
        )

    def _add_config_command(self, subparsers) -> None:
        config_parser = subparsers.add_parser(
            "config", help="Show or initialize settings.conf"
        )
        config_parser.add_argument(
            "--init",
            action="store_true",
            help="Write the current settings (defaults if none) to disk",
        )
