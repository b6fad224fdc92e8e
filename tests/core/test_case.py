"""Tests for CaseMode."""

import pytest

from diskpath.core import CaseMode


def test_key_folds_only_when_insensitive():
    """Test the comparison key per mode."""
    assert CaseMode.SENSITIVE.key("ABC") == "ABC"
    assert CaseMode.INSENSITIVE.key("ABC") == "abc"
    assert CaseMode.INSENSITIVE.equal("Straße", "STRASSE")


def test_host_mode_is_cached():
    """Test the host probe runs once and returns a CaseMode."""
    assert CaseMode.host() is CaseMode.host()
    assert isinstance(CaseMode.host(), CaseMode)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("true", CaseMode.SENSITIVE),
        ("Yes", CaseMode.SENSITIVE),
        ("false", CaseMode.INSENSITIVE),
        (" off ", CaseMode.INSENSITIVE),
    ],
)
def test_from_setting(value: str, expected: CaseMode):
    """Test settings values map to modes."""
    assert CaseMode.from_setting(value) is expected


def test_from_setting_auto_uses_host():
    """Test auto resolves to the host mode."""
    assert CaseMode.from_setting("auto") is CaseMode.host()


def test_from_setting_rejects_garbage():
    """Test an unknown value is a ValueError."""
    with pytest.raises(ValueError, match="case_sensitive"):
        CaseMode.from_setting("sometimes")
