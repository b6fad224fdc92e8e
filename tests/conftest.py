"""Pytest configuration and fixtures for diskpath tests."""

import logging
from pathlib import Path

import pytest

from diskpath.core import AbsDir, CaseMode


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for all loggers during tests.

    This allows pytest's caplog fixture to capture logs from all loggers,
    even those created with propagate=False in production code.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("diskpath"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path_factory, monkeypatch):
    """Keep logs and settings out of the user's home directory."""
    base = tmp_path_factory.mktemp("env")
    monkeypatch.setenv("DISKPATH_LOG_DIR", str(base / "logs"))
    monkeypatch.setenv("DISKPATH_CONFIG_DIR", str(base / "config"))


@pytest.fixture
def root(tmp_path: Path) -> AbsDir:
    """Provide the test's temporary directory as an AbsDir."""
    return AbsDir(str(tmp_path), case_mode=CaseMode.SENSITIVE)
