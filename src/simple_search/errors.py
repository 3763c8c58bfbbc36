"""Project-specific exceptions for simple-search-client."""

from __future__ import annotations

from typing import Any


class SimpleSearchError(Exception):
    """Base exception for the project."""


class ArgumentError(ValueError, SimpleSearchError):
    """Raised when call arguments are absent or miss a required key."""

    def __init__(self, message: str, missing_key: str | None = None) -> None:
        """Build exception payload for invalid call arguments."""
        super().__init__(message)
        self.missing_key = missing_key

    @classmethod
    def args_required(cls) -> ArgumentError:
        """Build the error used when no arguments mapping was supplied."""
        return cls("args required")

    @classmethod
    def missing_arg(cls, key: str) -> ArgumentError:
        """Build the error used when one required key is absent."""
        return cls(f"missing arg: {key}", missing_key=key)

    @classmethod
    def unserializable_body(cls, cause: Exception) -> ArgumentError:
        """Build the error used when a request body cannot be encoded as JSON."""
        return cls(f"body is not JSON serializable: {cause}")


class TransportError(SimpleSearchError):
    """Raised when the network round trip itself fails."""


class TransportTimeoutError(TransportError):
    """Raised when the transport gives up after the configured timeout."""

    def __init__(self, timeout_ms: int) -> None:
        """Build exception payload for timed out requests."""
        super().__init__(f"Request timed out after {timeout_ms} ms")
        self.timeout_ms = timeout_ms


class ResponseParseError(ValueError, SimpleSearchError):
    """Raised when a response body is not valid JSON."""

    def __init__(self, cause: str, raw: str | None) -> None:
        """Build exception payload embedding the offending body."""
        super().__init__(f"Error parsing response: {cause}: {raw}")
        self.raw = raw


class ServiceError(SimpleSearchError):
    """Raised when a decoded response carries a recognized service exception."""

    def __init__(self, service_error: object, raw: str | None, result: Any = None) -> None:
        """Build exception payload wrapping the service's own error text."""
        super().__init__(f"Service error: {service_error}")
        self.service_error = service_error
        self.raw = raw
        self.result = result


class UnsupportedOperationError(ValueError, SimpleSearchError):
    """Raised when the user asks for an unsupported command or format."""

    def __init__(self, name: str, supported: str) -> None:
        """Build exception payload for unsupported values."""
        super().__init__(f"Unsupported value '{name}'. Supported values: {supported}.")
