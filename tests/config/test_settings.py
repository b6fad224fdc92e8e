"""Tests for SettingsManager."""

from pathlib import Path

import pytest

from diskpath.config import SettingsManager, default_config_dir, default_settings
from diskpath.core import CaseMode


def _write_settings(config_dir: Path, text: str) -> None:
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "settings.conf").write_text(text, encoding="utf-8")


def test_missing_file_gives_defaults(tmp_path: Path):
    """Test defaults are returned and nothing is written."""
    manager = SettingsManager(tmp_path)

    assert manager.load() == default_settings()
    assert not manager.settings_file.exists()


def test_env_var_selects_config_dir(tmp_path: Path, monkeypatch):
    """Test DISKPATH_CONFIG_DIR overrides the default location."""
    monkeypatch.setenv("DISKPATH_CONFIG_DIR", str(tmp_path / "custom"))

    assert default_config_dir() == tmp_path / "custom"
    assert SettingsManager().settings_file == tmp_path / "custom" / "settings.conf"


def test_file_values_override_defaults(tmp_path: Path):
    """Test user values (with inline comments) win over defaults."""
    _write_settings(
        tmp_path,
        "[DEFAULT]\n"
        "log_level = debug  # chatty\n"
        "case_sensitive = false\n"
        "[delete]\n"
        "max_attempts = 5 ; give up eventually\n"
        "busy_retry_delay = 1.5\n"
        "[paths]\n"
        "vcs_dir = .hg\n",
    )
    manager = SettingsManager(tmp_path)

    settings = manager.load()

    assert settings["log_level"] == "DEBUG"
    assert settings["console_log_level"] == "WARNING"
    assert settings["delete"]["max_attempts"] == 5
    assert settings["delete"]["busy_retry_delay"] == 1.5
    assert settings["delete"]["locked_retry_delay"] == 0.5
    assert settings["paths"]["vcs_dir"] == ".hg"
    assert manager.case_mode(settings) is CaseMode.INSENSITIVE

    policy = manager.retry_policy(settings)
    assert policy.max_attempts == 5
    assert policy.bounded


@pytest.mark.parametrize(
    ("text", "key"),
    [
        ("[delete]\nmax_attempts = many\n", "max_attempts"),
        ("[delete]\nbackoff = fast\n", "backoff"),
        ("[DEFAULT]\nlog_level = LOUD\n", "log_level"),
        ("[DEFAULT]\ncase_sensitive = maybe\n", "case_sensitive"),
        ("[delete]\nlocked_retry_delay = -1\n", "delete"),
    ],
)
def test_invalid_values_name_the_key(tmp_path: Path, text: str, key: str):
    """Test bad values raise ValueError mentioning where they came from."""
    _write_settings(tmp_path, text)

    with pytest.raises(ValueError, match=key):
        SettingsManager(tmp_path).load()


def test_save_round_trip(tmp_path: Path):
    """Test saved settings load back identically."""
    manager = SettingsManager(tmp_path / "new")
    settings = default_settings()
    settings["delete"]["max_attempts"] = 7
    settings["case_sensitive"] = "true"

    manager.save(settings)

    assert manager.settings_file.exists()
    assert "# auto, true or false" in manager.settings_file.read_text(encoding="utf-8")
    assert manager.load() == settings
