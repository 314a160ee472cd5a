"""Environment configuration for JSON-RPC sessions.

Settings are read from environment variables with the JSONRPC_SESSION_
prefix. Nested session options use a double underscore:

- JSONRPC_SESSION_URL: Endpoint URL (http or https)
- JSONRPC_SESSION_TIMEOUT: Connect and read timeout in seconds
- JSONRPC_SESSION_OPTIONS__ACCEPT_COOKIES: true/false
- JSONRPC_SESSION_OPTIONS__ORIGIN: Origin header value
- JSONRPC_SESSION_OPTIONS__ALLOWED_RESPONSE_CONTENT_TYPES: JSON list
- JSONRPC_SESSION_OPTIONS__TRUST_ALL_CERTIFICATES: true/false
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jsonrpc_session.options import SessionOptions
from jsonrpc_session.session import JsonRpcSession
from jsonrpc_session.transport.connection import HttpConnection


class SessionSettings(BaseSettings):
    """JSON-RPC session configuration.

    Attributes:
        url: Endpoint URL
        timeout: Timeout in seconds applied to every connection, or None
        options: Session options

    Example:
        >>> settings = SessionSettings(url="http://localhost:8080/jsonrpc")
        >>> settings.options.accept_cookies
        False
    """

    url: str | None = Field(default=None)
    timeout: float | None = Field(default=None, gt=0)
    options: SessionOptions = Field(default_factory=SessionOptions)

    model_config = SettingsConfigDict(
        env_prefix="JSONRPC_SESSION_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """Validate URL scheme."""
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v


@lru_cache(maxsize=1)
def get_settings() -> SessionSettings:
    """Load and cache settings from the environment.

    Call ``get_settings.cache_clear()`` after changing the environment.
    """
    return SessionSettings()


def create_session(settings: SessionSettings | None = None) -> JsonRpcSession:
    """Build a session from settings.

    Args:
        settings: Settings to use (default: ``get_settings()``)

    Returns:
        Configured session

    Raises:
        ValueError: If no endpoint URL is configured
    """
    settings = settings or get_settings()
    if not settings.url:
        raise ValueError("No endpoint URL configured (set JSONRPC_SESSION_URL)")

    session = JsonRpcSession(settings.url, options=settings.options.model_copy(deep=True))

    if settings.timeout is not None:
        timeout = settings.timeout

        def apply_timeout(connection: HttpConnection) -> None:
            connection.timeout = timeout

        session.connection_configurator = apply_timeout

    return session
