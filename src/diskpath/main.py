"""Main CLI entry point for diskpath.

This module provides the minimal entry point for the command-line
interface, delegating all functionality to the runner and the command
handlers.
"""

import sys

from diskpath.cli import CLIRunner
from diskpath.logger import get_logger

logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Run the CLI application and return its exit code.

    Args:
        argv: Arguments to parse; defaults to ``sys.argv[1:]``

    """
    try:
        runner = CLIRunner()
        return runner.run(argv)
    except KeyboardInterrupt:
        logger.info("CLI cancelled by user")
        return 1
    except ValueError as e:
        # Raised while reading settings.conf, before any command runs
        logger.error("Invalid settings: %s", e)  # noqa: TRY400
        print(f"❌ Invalid settings: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
