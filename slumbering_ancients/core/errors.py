"""Domain errors raised by services and converted to HTTP responses.

Each error carries the HTTP status code the API reports for it, so services
stay free of FastAPI types while handlers can still answer consistently.
"""

from typing import Any, Dict, Optional


class SlumberingAncientsError(Exception):
    """Base class for every domain error of the service."""

    status_code: int = 500

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationFailedError(SlumberingAncientsError):
    """The request payload is syntactically valid but semantically unusable."""

    status_code = 400


class NotFoundError(SlumberingAncientsError):
    status_code = 404


class ConflictError(SlumberingAncientsError):
    status_code = 409


class ConfigurationError(SlumberingAncientsError):
    """A required setting (API key, folder id...) is missing."""

    status_code = 500


class AnalysisParseError(SlumberingAncientsError):
    """The model's map analysis could not be turned into areas."""

    status_code = 500


class UpstreamServiceError(SlumberingAncientsError):
    """Base for failures of remote HTTP APIs (OpenAI, Google Drive)."""

    status_code = 502

    def __init__(
        self,
        message: str,
        *,
        upstream_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.upstream_status = upstream_status
