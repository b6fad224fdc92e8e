"""Fixtures shared by the CLI tests."""

import pytest

from diskpath.logger import clear_logger_state


@pytest.fixture(autouse=True)
def reset_logging(capsys):
    """Stop the handlers the runner attaches before capture is torn down."""
    yield
    clear_logger_state()
