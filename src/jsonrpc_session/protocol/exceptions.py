"""Protocol layer exceptions.

These exceptions are raised by the message codec when JSON-RPC 2.0 text
cannot be turned into a message object. They have no knowledge of HTTP.
"""

from __future__ import annotations


class ProtocolError(Exception):
    """Base exception for protocol layer errors.

    Args:
        message: Human-readable error description
        code: JSON-RPC error code (optional)

    Attributes:
        message: Error message
        code: JSON-RPC error code (or None)
    """

    def __init__(self, message: str, code: int | None = None) -> None:
        """Initialize ProtocolError.

        Args:
            message: Human-readable error description
            code: JSON-RPC error code (optional)
        """
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        """Return string representation of error.

        Returns:
            Formatted error message with code if present
        """
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ParseError(ProtocolError):
    """JSON-RPC 2.0 message could not be parsed.

    Raised when the text is not valid JSON or does not describe a valid
    JSON-RPC 2.0 message.

    Error code: -32700

    Example:
        >>> raise ParseError("Missing 'id' member", unparsable='{"result": 1}')
    """

    def __init__(self, message: str, unparsable: str | None = None) -> None:
        """Initialize ParseError.

        Args:
            message: Error description
            unparsable: The text that failed to parse
        """
        super().__init__(message, code=-32700)
        self.unparsable = unparsable
