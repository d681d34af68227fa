"""Exception taxonomy for graph-messenger."""

from __future__ import annotations


class GraphMessengerError(Exception):
    """Base class for all errors raised by graph-messenger."""


class ConfigError(GraphMessengerError):
    """Raised when required credentials are missing or invalid."""


class RequestError(GraphMessengerError):
    """Raised when an outbound call is built from malformed arguments."""


class TransportError(GraphMessengerError):
    """Raised when the request never produced a response (network failure)."""


class InvalidResponseError(GraphMessengerError):
    """Raised when the Graph API response has an unexpected shape."""


class ApiError(GraphMessengerError):
    """Raised when the Graph API answers with a non-200 status."""

    def __init__(self, status_code: int, method: str, url: str) -> None:
        self.status_code = status_code
        self.method = method
        self.url = url
        super().__init__(
            f"received error {status_code} for a {method.upper()} request to {url}"
        )


class AuthError(GraphMessengerError):
    """Raised when a webhook payload fails signature authentication."""
