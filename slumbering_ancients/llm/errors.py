"""Error types specific to the LLM provider layer.

Usage:
- Catch `OpenAIApiError` for failed HTTP calls to the provider and inspect
  `upstream_status` or `details`.
"""

from __future__ import annotations

from slumbering_ancients.core.errors import UpstreamServiceError


class OpenAIApiError(UpstreamServiceError):
    """Raised when an OpenAI HTTP call fails or returns an unexpected payload.

    Args:
        message: Human-readable error description.
        upstream_status: HTTP status code returned by OpenAI, if any.
        details: Structured payload from the server (e.g., JSON body).
    """
