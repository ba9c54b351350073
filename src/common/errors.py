"""Gateway error taxonomy.

Every user-visible failure carries a human-readable `message`; `details` is
optional internal context the caller never needs in order to proceed.
"""

from __future__ import annotations

from typing import Optional


class GatewayError(Exception):
    """Base class for errors surfaced to HTTP callers."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class PolicyViolation(GatewayError):
    """Input rejected before any upstream call (oversized, injection pattern, missing)."""

    status_code = 400


class AuthFailure(GatewayError):
    status_code = 401


class NotFound(GatewayError):
    status_code = 404


class UpstreamUnavailable(GatewayError):
    """Feed, provider, or article fetch failed and no fallback remains."""

    status_code = 502


class ProviderError(Exception):
    """A single generative provider call failed (non-2xx or malformed transport)."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class InvalidRequest(GatewayError):
    """Malformed request (missing parameter, body that is not a JSON object)."""

    status_code = 400
