"""Exception classes for tap-tools operations.

The four asset/network/archive failures (no candidate, download,
checksum mismatch, archive parse) abort a run. Heuristic detection misses
are never exceptions; detectors return None instead.
"""


class TapToolsError(Exception):
    """Base exception for tap-tools operations."""

    error_prefix: str = "Operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the asset, URL or repository involved.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class NoCandidateError(TapToolsError):
    """Raised when filtering and selection leave no usable asset."""

    error_prefix = "No compatible asset"


class DownloadError(TapToolsError):
    """Raised when a fetch fails or returns a non-success status."""

    error_prefix = "Download failed"


class ChecksumMismatchError(TapToolsError):
    """Raised when a computed hash disagrees with an upstream checksum."""

    error_prefix = "Checksum mismatch"

    def __init__(
        self,
        message: str,
        target: str | None = None,
        expected: str | None = None,
        actual: str | None = None,
    ) -> None:
        """Initialize mismatch error with the two disagreeing digests.

        Args:
            message: Error message describing the failure.
            target: Asset filename that was verified.
            expected: Digest published upstream.
            actual: Digest computed over the downloaded bytes.

        """
        super().__init__(message, target)
        self.expected = expected
        self.actual = actual


class ArchiveParseError(TapToolsError):
    """Raised when a supported archive format fails to decode."""

    error_prefix = "Archive parse failed"


class ReleaseFetchError(TapToolsError):
    """Raised when release metadata cannot be retrieved."""

    error_prefix = "Release lookup failed"


class ValidationError(TapToolsError):
    """Raised when user-supplied input is invalid."""

    error_prefix = "Validation failed"


class ConfigurationError(TapToolsError):
    """Raised when configuration or logging setup fails."""

    error_prefix = "Configuration error"
