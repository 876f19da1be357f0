"""Error types surfaced to clients as JSON error envelopes."""
from __future__ import annotations


class ProxyError(Exception):
    """Base error carrying the HTTP status and the client-visible message."""

    status_code = 500

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def envelope(self) -> dict[str, str]:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class InvalidRequest(ProxyError):
    """A mandatory field is missing or malformed."""

    status_code = 400


class MissingCredential(ProxyError):
    """The provider API key is absent from process configuration."""

    status_code = 500

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} is not set")
        self.env_name = env_name


class UpstreamFailure(ProxyError):
    """The provider call failed or returned something unusable."""

    status_code = 500


class UpstreamResponseError(ValueError):
    """Raised by adapters when a provider body lacks the expected fields."""
