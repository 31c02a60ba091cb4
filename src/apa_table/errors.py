"""Error taxonomy for table generation and export.

Engine-internal edge cases (alignment mismatch, ragged rows, a caption with
no number) are silent fallbacks and never raise.  The classes below cover the
hard stops: nothing usable to parse, input that could not be read, and export
requests that cannot be satisfied.
"""

from typing import Any


class ApaTableError(Exception):
    """Base class for all APA table errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a dict for JSON responses."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class EmptyDataError(ApaTableError):
    """Raised when no non-blank rows remain after filtering the raw text."""

    def __init__(self, message: str = "No data found."):
        super().__init__(message)


class AcquisitionError(ApaTableError):
    """Raised when an uploaded file or pasted text could not be read."""

    def __init__(self, message: str = "Error processing data. Check formatting or encoding.", source: str | None = None):
        super().__init__(message, {"source": source} if source else None)
        self.source = source


class ExportPreconditionError(ApaTableError):
    """Raised when an export is requested before any table has been rendered."""

    def __init__(self, message: str = "Please generate a table first."):
        super().__init__(message)


class ExportTransportError(ApaTableError):
    """Raised when rasterisation or a clipboard hand-off fails.

    ``fallback`` names the action the user should try instead.
    """

    def __init__(self, message: str, fallback: str = "Please try the Download PNG option."):
        super().__init__(message, {"fallback": fallback})
        self.fallback = fallback

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["fallback"] = self.fallback
        return payload
