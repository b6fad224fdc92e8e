"""Tests for directory digest manifests."""

import orjson
import pytest

from diskpath.core import AbsDir
from diskpath.core.manifest import (
    build_manifest,
    load_manifest,
    save_manifest,
    verify_manifest,
)
from diskpath.exceptions import ManifestError


@pytest.fixture
def tree(root: AbsDir) -> AbsDir:
    base = root.combine_dir("tree")
    base.combine_file("a.txt").write_text("alpha")
    base.combine_file("sub", "b.txt").write_text("beta")
    return base


def test_build_manifest(tree: AbsDir):
    """Test every file is recorded under its relative posix path."""
    manifest = build_manifest(tree)

    assert manifest["algorithm"] == "sha256"
    assert manifest["format_version"] == "1.0.0"
    assert set(manifest["files"]) == {"a.txt", "sub/b.txt"}
    entry = manifest["files"]["a.txt"]
    assert entry["size"] == 5
    assert entry["digest"] == tree.combine_file("a.txt").content_sha256()


def test_save_and_load(tree: AbsDir, root: AbsDir):
    """Test a saved manifest loads back unchanged."""
    manifest = build_manifest(tree, "sha1")
    output = root.combine_file("out", "manifest.json")

    save_manifest(output, manifest)

    assert load_manifest(output) == manifest


def test_verify_clean_tree(tree: AbsDir):
    """Test an untouched tree reports no differences."""
    report = verify_manifest(tree, build_manifest(tree))

    assert report == {"missing": [], "changed": [], "unexpected": []}


def test_verify_detects_changes(tree: AbsDir):
    """Test missing, changed and unexpected files are reported."""
    manifest = build_manifest(tree)
    tree.combine_file("a.txt").write_text("ALPHA!")
    tree.combine_file("sub", "b.txt").delete_file()
    tree.combine_file("new.txt").write_text("n")

    report = verify_manifest(tree, manifest)

    assert report == {
        "missing": ["sub/b.txt"],
        "changed": ["a.txt"],
        "unexpected": ["new.txt"],
    }


def test_load_rejects_future_major_version(root: AbsDir):
    """Test an unknown major format version is refused."""
    file = root.combine_file("m.json")
    file.write_bytes(
        orjson.dumps({"format_version": "2.0.0", "algorithm": "sha256", "files": {}})
    )

    with pytest.raises(ManifestError, match="unsupported format version"):
        load_manifest(file)


def test_load_accepts_minor_version(root: AbsDir):
    """Test a newer minor version of the same major loads."""
    file = root.combine_file("m.json")
    file.write_bytes(
        orjson.dumps({"format_version": "1.4", "algorithm": "sha256", "files": {}})
    )

    assert load_manifest(file)["files"] == {}


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        (b"{not json", "invalid JSON"),
        (b"[]", "JSON object"),
        (b'{"format_version": "1.0.0"}', "missing keys"),
        (
            b'{"format_version": "banana", "algorithm": "md5", "files": {}}',
            "invalid format version",
        ),
    ],
)
def test_load_rejects_bad_files(root: AbsDir, payload: bytes, message: str):
    """Test malformed manifests raise ManifestError."""
    file = root.combine_file("bad.json")
    file.write_bytes(payload)

    with pytest.raises(ManifestError, match=message):
        load_manifest(file)
