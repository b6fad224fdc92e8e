"""Tests for unique and temporary file naming."""

import random
import re

import pytest

from diskpath.core import AbsDir
from diskpath.core.naming import TempNameSource, next_unique_name


@pytest.mark.parametrize(
    ("stem", "suffix", "expected"),
    [
        ("report", ".txt", "report (1).txt"),
        ("report (1)", ".txt", "report (2).txt"),
        ("report (9)", ".txt", "report (10).txt"),
        ("notes", "", "notes (1)"),
        ("draft (x)", ".md", "draft (x) (1).md"),
    ],
)
def test_next_unique_name(stem: str, suffix: str, expected: str):
    """Test the candidate sequence rule."""
    assert next_unique_name(stem, suffix) == expected


def test_temp_suffix_format():
    """Test temp suffixes look like -<11 lowercase alnum>-tmp."""
    suffix = TempNameSource().suffix()

    assert re.fullmatch(r"-[a-z0-9]{11}-tmp", suffix)


def test_seeded_source_is_reproducible():
    """Test the same seed yields the same sequence."""
    first = TempNameSource(random.Random(42))
    second = TempNameSource(random.Random(42))

    assert [first.token() for _ in range(3)] == [second.token() for _ in range(3)]


def test_find_unique_returns_requested_name_when_free(root: AbsDir):
    """Test a free name is returned unchanged."""
    target = root.combine_file("base.txt")

    assert target.find_unique() == target


def test_find_unique_skips_existing(root: AbsDir):
    """Test find_unique is compute-only and skips taken names."""
    target = root.combine_file("base.txt")
    target.write_text("taken")
    root.combine_file("base (1).txt").write_text("taken")

    result = target.find_unique()

    assert result.name == "base (2).txt"
    assert not result.exists()


def test_create_unique_sequence(root: AbsDir):
    """Test N calls create base, base (1), ..., base (N-1)."""
    target = root.combine_file("base.txt")

    created = [target.create_unique() for _ in range(4)]

    assert [f.name for f in created] == [
        "base.txt",
        "base (1).txt",
        "base (2).txt",
        "base (3).txt",
    ]
    assert all(f.exists() and f.read_bytes() == b"" for f in created)


def test_create_unique_creates_parent(root: AbsDir):
    """Test the parent directory is created on demand."""
    target = root.combine_file("new", "dir", "file.txt")

    result = target.create_unique()

    assert result == target
    assert result.exists()


def test_create_tmp_retries_on_collision(root: AbsDir):
    """Test a taken temp name is skipped, never reused."""
    target = root.combine_file("data.bin")
    seed_names = TempNameSource(random.Random(7))
    taken = target.append_suffix(seed_names.suffix())
    taken.write_text("someone else")

    with target.create_tmp(names=TempNameSource(random.Random(7))) as tmp:
        assert tmp.file != taken
        assert tmp.file.exists()
        assert tmp.file.name.startswith("data.bin-")

    assert taken.read_text() == "someone else"


def test_find_tmp_does_not_create(root: AbsDir):
    """Test find_tmp only computes a free name."""
    target = root.combine_file("data.bin")

    with target.find_tmp() as tmp:
        assert not tmp.file.exists()
        assert tmp.path.endswith("-tmp")
