from __future__ import annotations


class RelayError(RuntimeError):
    """Base class for every error the relay client can surface to the user."""


class NetworkError(RelayError):
    """Malformed URL, connection failure or a non-200 response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(RelayError, ValueError):
    """Response body is not JSON or is missing an expected field."""


class ProviderError(RelayError):
    """The push provider could not issue a token or dispatch a payload."""


class StoreError(RelayError):
    """The local token cache could not be read or written."""
