"""Error types specific to the Google Drive ingestion layer."""

from __future__ import annotations

from slumbering_ancients.core.errors import UpstreamServiceError


class DriveApiError(UpstreamServiceError):
    """Raised when a Google Drive API call fails.

    Args:
        message: Human-readable error description.
        upstream_status: HTTP status code returned by Drive, if any.
        details: Structured payload from the server (e.g., error body).
    """


class DriveRateLimitError(DriveApiError):
    """Drive kept refusing requests as automated queries after every retry."""
