"""Streaming content digests."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

from diskpath.constants import DIGEST_CHUNK_SIZE, SUPPORTED_DIGEST_ALGORITHMS
from diskpath.core import host
from diskpath.exceptions import DigestSourceUnavailableError
from diskpath.logger import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    DigestFactory = Callable[[], "hashlib._Hash"]

logger = get_logger(__name__)


def _resolve_algorithm(algorithm: str | DigestFactory) -> DigestFactory:
    """Map an algorithm name or constructor to a constructor."""
    if callable(algorithm):
        return algorithm

    name = algorithm.lower().replace("-", "")
    if name not in SUPPORTED_DIGEST_ALGORITHMS:
        msg = f"Unsupported digest algorithm: {algorithm}"
        raise ValueError(msg)
    return getattr(hashlib, name)


def content_digest(path: str, algorithm: str | DigestFactory) -> str:
    """Hash the whole file at ``path`` and return uppercase hex.

    The file is read in chunks through a read-only handle, so other readers
    are never blocked.

    Args:
        path: File to hash
        algorithm: ``hashlib`` name (``"sha1"``, ``"sha256"``, ...) or a
            constructor such as ``hashlib.sha256``

    Returns:
        Hex digest in uppercase, no separators

    Raises:
        DigestSourceUnavailableError: If the file is missing or unreadable
        ValueError: If the algorithm name is not supported

    """
    hasher = _resolve_algorithm(algorithm)()
    bytes_processed = 0

    try:
        with host.open_read(path) as stream:
            for chunk in iter(lambda: stream.read(DIGEST_CHUNK_SIZE), b""):
                hasher.update(chunk)
                bytes_processed += len(chunk)
    except OSError as e:
        raise DigestSourceUnavailableError(str(e), target=path) from e

    computed = hasher.hexdigest().upper()
    logger.debug(
        "Computed %s of %s (%d bytes): %s",
        hasher.name,
        path,
        bytes_processed,
        computed,
    )
    return computed
