"""Classified session errors.

Every failure of a session call surfaces as exactly one of these
exceptions. The kind tells the caller what went wrong without inspecting
the message: the network, the response content type, or the response
itself.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Failure taxonomy of a session call."""

    NETWORK = "network"
    UNEXPECTED_CONTENT_TYPE = "unexpected_content_type"
    BAD_RESPONSE = "bad_response"


class JsonRpcSessionError(Exception):
    """Base exception for session call failures.

    Args:
        message: Human-readable error description
        cause: Original exception that caused this error

    Attributes:
        kind: Classified error kind
        message: Error message
        cause: Original exception (or None)
    """

    kind: ErrorKind

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        """Initialize JsonRpcSessionError.

        Args:
            message: Human-readable error description
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        """Return string representation of error.

        Returns:
            Error message followed by the cause, if any
        """
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class NetworkError(JsonRpcSessionError):
    """Transport-level failure.

    Raised when the connection cannot be opened, or when writing the
    request or reading the response fails. Always wraps the originating
    transport error.

    Examples:
        - Connection refused
        - DNS lookup failed
        - TLS certificate verification failed
        - Timeout set by a connection configurator
    """

    kind = ErrorKind.NETWORK


class UnexpectedContentTypeError(JsonRpcSessionError):
    """Response content type is not in the allowed list."""

    kind = ErrorKind.UNEXPECTED_CONTENT_TYPE

    def __init__(self, content_type: str | None) -> None:
        """Initialize with the offending content type."""
        super().__init__(
            f"The server returned an unexpected content type '{content_type}' response"
        )
        self.content_type = content_type


class BadResponseError(JsonRpcSessionError):
    """Response is not a valid JSON-RPC 2.0 reply to the request.

    Examples:
        - Body is not valid JSON-RPC 2.0 (cause is the codec ParseError)
        - Response identity does not match the request identity
    """

    kind = ErrorKind.BAD_RESPONSE
