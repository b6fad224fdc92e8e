"""Configuration management.

This package provides:
- SettingsManager: INI settings file access (from settings.py)
- default_settings / default_config_dir: built-in values
"""

from diskpath.config.settings import (
    SettingsManager,
    default_config_dir,
    default_settings,
)
from diskpath.types import DiskSettings

__all__ = [
    "DiskSettings",
    "SettingsManager",
    "default_config_dir",
    "default_settings",
]
