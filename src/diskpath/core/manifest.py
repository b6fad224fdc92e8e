"""Digest manifests for directory trees.

A manifest records, for every file below a root, its content digest, its
size and its last-write time, keyed by the file's path relative to the
root with ``/`` separators. Manifests are saved as JSON through the same
atomic write the path types use, so a reader never sees half a manifest.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import orjson
from packaging.version import InvalidVersion, Version

from diskpath.constants import MANIFEST_ALGORITHM, MANIFEST_FORMAT_VERSION
from diskpath.core import host
from diskpath.core.algebra import relativize, resolve
from diskpath.core.relative import RelFile
from diskpath.exceptions import ManifestError
from diskpath.logger import get_logger
from diskpath.types import Manifest, ManifestEntry, ManifestReport

if TYPE_CHECKING:
    from diskpath.core.directory import AbsDir
    from diskpath.core.file import AbsFile

logger = get_logger(__name__)

_REQUIRED_KEYS = ("format_version", "algorithm", "files")


def _entry_for(file: AbsFile, algorithm: str) -> ManifestEntry:
    return {
        "digest": file.content_digest(algorithm),
        "size": host.stat(file.path).st_size,
        "modified": file.last_write_time().isoformat(),
    }


def build_manifest(root: AbsDir, algorithm: str = MANIFEST_ALGORITHM) -> Manifest:
    """Digest every file below ``root``.

    Args:
        root: Directory to scan recursively
        algorithm: ``hashlib`` algorithm name

    Returns:
        Manifest keyed by relative ``/``-separated path

    """
    files: dict[str, ManifestEntry] = {}
    for file in root.list_files(recursive=True):
        key = relativize(file, root).as_posix()
        files[key] = _entry_for(file, algorithm)

    logger.info("Built manifest of %d files under %s", len(files), root)
    return {
        "format_version": MANIFEST_FORMAT_VERSION,
        "algorithm": algorithm,
        "created": datetime.now(UTC).isoformat(),
        "files": dict(sorted(files.items())),
    }


def save_manifest(file: AbsFile, manifest: Manifest) -> None:
    """Write ``manifest`` to ``file`` atomically as indented JSON."""
    file.write_bytes(
        orjson.dumps(manifest, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS)
    )
    logger.debug("Saved manifest to %s", file)


def load_manifest(file: AbsFile) -> Manifest:
    """Read and check a manifest written by ``save_manifest``.

    Raises:
        ManifestError: If the file is not valid JSON, lacks required keys
            or carries a format version with an unknown major number
        OSError: If the file cannot be read

    """
    try:
        data = orjson.loads(file.read_bytes())
    except orjson.JSONDecodeError as e:
        msg = f"invalid JSON: {e}"
        raise ManifestError(msg, target=file.path) from e

    if not isinstance(data, dict):
        msg = "manifest must be a JSON object"
        raise ManifestError(msg, target=file.path)

    missing = [key for key in _REQUIRED_KEYS if key not in data]
    if missing:
        msg = f"missing keys: {', '.join(missing)}"
        raise ManifestError(msg, target=file.path)

    try:
        found = Version(str(data["format_version"]))
    except InvalidVersion as e:
        msg = f"invalid format version {data['format_version']!r}"
        raise ManifestError(msg, target=file.path) from e

    supported = Version(MANIFEST_FORMAT_VERSION)
    if found.major != supported.major:
        msg = f"unsupported format version {found} (expected {supported.major}.x)"
        raise ManifestError(msg, target=file.path)

    data.setdefault("created", "")
    return data


def verify_manifest(root: AbsDir, manifest: Manifest) -> ManifestReport:
    """Compare the tree below ``root`` with ``manifest``.

    A file counts as changed when its size or digest differs; the
    last-write time is informational only.

    Returns:
        Sorted relative paths that are missing, changed or unexpected

    """
    algorithm = manifest["algorithm"]
    recorded = manifest["files"]
    report: ManifestReport = {"missing": [], "changed": [], "unexpected": []}

    for key, entry in recorded.items():
        file = resolve(root, RelFile(key))
        if not file.exists():
            report["missing"].append(key)
            continue
        current = _entry_for(file, algorithm)
        if (
            current["size"] != entry["size"]
            or current["digest"] != entry["digest"].upper()
        ):
            report["changed"].append(key)

    for file in root.list_files(recursive=True):
        key = relativize(file, root).as_posix()
        if key not in recorded:
            report["unexpected"].append(key)

    for paths in report.values():
        paths.sort()

    logger.info(
        "Verified %s: %d missing, %d changed, %d unexpected",
        root,
        len(report["missing"]),
        len(report["changed"]),
        len(report["unexpected"]),
    )
    return report
