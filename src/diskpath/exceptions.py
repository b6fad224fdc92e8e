"""Exception classes for diskpath operations."""


class DiskPathError(Exception):
    """Base exception for diskpath operations."""

    error_prefix: str = "Operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional path (as text) the failure refers to.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class InvalidPathError(DiskPathError, ValueError):
    """Raised when a path string is not in the form its type requires."""

    error_prefix = "Invalid path"


class NotUnderRootError(DiskPathError, ValueError):
    """Raised when relativizing a path that is not below the given root."""

    error_prefix = "Path not under root"


class NotADirectoryPathError(DiskPathError, NotADirectoryError):
    """Raised when a directory operation finds a file at the path."""

    error_prefix = "Expected a directory"


class NotAFilePathError(DiskPathError, IsADirectoryError):
    """Raised when a file operation finds a directory at the path."""

    error_prefix = "Expected a file"


class TransientIOError(DiskPathError, OSError):
    """Raised when a retried operation gives up on a transient failure."""

    error_prefix = "Transient I/O failure"


class DigestSourceUnavailableError(DiskPathError, OSError):
    """Raised when the file to digest is missing or unreadable."""

    error_prefix = "Digest source unavailable"


class ManifestError(DiskPathError):
    """Raised when a digest manifest cannot be read or is unsupported."""

    error_prefix = "Manifest error"
