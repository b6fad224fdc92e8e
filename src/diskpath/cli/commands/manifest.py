"""Manifest command handler: build, save or verify a digest manifest."""

from argparse import Namespace

from diskpath.core.manifest import (
    build_manifest,
    load_manifest,
    save_manifest,
    verify_manifest,
)
from diskpath.logger import get_logger

from .base import BaseCommandHandler

logger = get_logger(__name__)


class ManifestHandler(BaseCommandHandler):
    """Handler for the manifest command.

    Exit code 1 from ``--verify`` means the tree differs from the manifest.
    """

    def execute(self, args: Namespace) -> int:
        """Run the manifest command."""
        root = self.dir_arg(args.root)

        if args.verify:
            manifest = load_manifest(self.file_arg(args.verify))
            report = verify_manifest(root, manifest)
            self.emit(report)
            if any(report.values()):
                logger.warning("Tree %s differs from %s", root, args.verify)
                return 1
            return 0

        manifest = build_manifest(root, args.algorithm)
        if args.output:
            output = self.file_arg(args.output)
            save_manifest(output, manifest)
            self.emit({"manifest": output.path, "files": len(manifest["files"])})
        else:
            self.emit(manifest)
        return 0
