"""Per-session options.

Options are a snapshot: the session copies them at the start of each
call, so replacing or mutating them mid-call only affects later calls.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_ALLOWED_RESPONSE_CONTENT_TYPES = ("application/json", "text/plain")
DEFAULT_ACCEPT_COOKIES = False
DEFAULT_ORIGIN = None
DEFAULT_PRESERVE_PARSE_ORDER = False
DEFAULT_IGNORE_VERSION = False
DEFAULT_PARSE_NON_STD_ATTRIBUTES = False
DEFAULT_TRUST_ALL_CERTIFICATES = False


class SessionOptions(BaseModel):
    """Options applied to every request and notification of a session.

    Attributes:
        request_content_type: Outbound "Content-Type" header; None sends none
        allowed_response_content_types: Accepted response content types,
            matched by prefix; None or empty disables the check
        accept_cookies: Store "Set-Cookie" values and replay them
        origin: Outbound "Origin" header; None sends none
        preserve_parse_order: Keep JSON object member order when decoding
        ignore_version: Tolerate a missing or wrong "jsonrpc" member
        parse_non_std_attributes: Keep unrecognized response members
            instead of rejecting the response
        trust_all_certificates: Skip TLS chain and hostname verification.
            Insecure, for self-signed test servers only.

    Example:
        >>> options = SessionOptions(accept_cookies=True)
        >>> options.is_allowed_response_content_type("application/json;charset=utf8")
        True
    """

    request_content_type: str | None = Field(default=DEFAULT_CONTENT_TYPE)
    allowed_response_content_types: list[str] | None = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_RESPONSE_CONTENT_TYPES)
    )
    accept_cookies: bool = DEFAULT_ACCEPT_COOKIES
    origin: str | None = DEFAULT_ORIGIN
    preserve_parse_order: bool = DEFAULT_PRESERVE_PARSE_ORDER
    ignore_version: bool = DEFAULT_IGNORE_VERSION
    parse_non_std_attributes: bool = DEFAULT_PARSE_NON_STD_ATTRIBUTES
    trust_all_certificates: bool = DEFAULT_TRUST_ALL_CERTIFICATES

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("request_content_type", "origin")
    @classmethod
    def validate_header_value(cls, v: str | None) -> str | None:
        """Validate header values are sendable (ISO-8859-1, single line)."""
        if v is None:
            return v
        try:
            v.encode("latin-1")
        except UnicodeEncodeError as e:
            raise ValueError("Header value must be ISO-8859-1 encodable") from e
        if "\r" in v or "\n" in v:
            raise ValueError("Header value must not contain line breaks")
        return v

    @property
    def checks_response_content_type(self) -> bool:
        """Check if an allowed response content type list is in force."""
        return bool(self.allowed_response_content_types)

    def is_allowed_response_content_type(self, content_type: str | None) -> bool:
        """Check a response content type against the allowed list.

        A content type is allowed if it starts with one of the allowed
        types, so "application/json;charset=utf8" matches
        "application/json". With no allowed list every content type,
        including a missing one, is allowed.

        Args:
            content_type: Response "Content-Type" value, or None if absent

        Returns:
            True if the content type is allowed
        """
        if not self.checks_response_content_type:
            return True
        if content_type is None:
            return False
        return any(content_type.startswith(allowed) for allowed in self.allowed_response_content_types)
