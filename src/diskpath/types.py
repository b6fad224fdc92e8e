"""Centralized type definitions for diskpath.

This module contains the TypedDict definitions shared between the settings
layer, the manifest module and the CLI.
"""

from typing import TypedDict

# =============================================================================
# Configuration Types
# =============================================================================


class DeleteConfig(TypedDict):
    """Retry settings for directory deletion under contention."""

    locked_retry_delay: float
    busy_retry_delay: float
    backoff: float
    max_delay: float
    max_attempts: int


class PathsConfig(TypedDict):
    """Path handling settings."""

    vcs_dir: str


class DiskSettings(TypedDict):
    """Effective diskpath settings."""

    log_level: str
    console_log_level: str
    case_sensitive: str
    delete: DeleteConfig
    paths: PathsConfig


# =============================================================================
# Manifest Types
# =============================================================================


class ManifestEntry(TypedDict):
    """Digest record for one file in a manifest."""

    digest: str
    size: int
    modified: str


class Manifest(TypedDict):
    """Digest manifest of a directory tree."""

    format_version: str
    algorithm: str
    created: str
    files: dict[str, ManifestEntry]


class ManifestReport(TypedDict):
    """Differences between a manifest and a directory tree."""

    missing: list[str]
    changed: list[str]
    unexpected: list[str]
