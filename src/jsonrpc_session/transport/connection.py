"""HTTP connection for a single session call.

This module performs the HTTP exchange. It has NO knowledge of JSON-RPC:
it posts a text body and captures whatever comes back.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from urllib.parse import urlparse

import requests
import structlog
from requests.structures import CaseInsensitiveDict

from jsonrpc_session.transport.raw_response import RawResponse

logger = structlog.get_logger()


class HttpConnection:
    """Outbound HTTP exchange, open for configuration until sent.

    A session builds one connection per call, applies its headers and TLS
    mode, then hands it to the connection configurator, which has the last
    word on any attribute before the exchange happens.

    There is no timeout by default; set ``timeout`` from a configurator.

    Args:
        url: Endpoint URL (http or https)
        method: HTTP method (default: "POST")

    Attributes:
        url: Endpoint URL
        method: HTTP method
        headers: Request headers (case-insensitive)
        timeout: Seconds, (connect, read) tuple, or None for no timeout
        verify: True, False (no TLS verification), or a CA bundle path
        cert: Client certificate path or (cert, key) tuple
        proxies: Scheme to proxy URL mapping
        allow_redirects: Follow HTTP redirects

    Example:
        >>> def configure(connection: HttpConnection) -> None:
        ...     connection.timeout = 5.0
        ...     connection.headers["Authorization"] = "Bearer jwt-123"
    """

    def __init__(self, url: str, method: str = "POST") -> None:
        """Initialize connection settings.

        Args:
            url: Endpoint URL
            method: HTTP method
        """
        self.url = url
        self.method = method
        self.headers: CaseInsensitiveDict[str] = CaseInsensitiveDict()
        self.timeout: float | tuple[float, float] | None = None
        self.verify: bool | str = True
        self.cert: str | tuple[str, str] | None = None
        self.proxies: dict[str, str] = {}
        self.allow_redirects = True

    @property
    def uses_tls(self) -> bool:
        """True if the endpoint is reached over HTTPS."""
        return urlparse(self.url).scheme == "https"

    def trust_all_certificates(self) -> None:
        """Accept any server certificate, self-signed included.

        Disables certificate chain and hostname verification. Insecure:
        only for test servers with self-signed certificates.
        """
        self.verify = False
        logger.warning("tls_verification_disabled", url=self.url)

    def exchange(self, body: str) -> RawResponse:
        """POST the body and read the full response.

        A fresh ``requests.Session`` is used for every exchange, so no
        connection or cookie state is carried between calls.

        Args:
            body: Request body text, sent UTF-8 encoded

        Returns:
            Captured response, whatever its status code

        Raises:
            requests.exceptions.RequestException: On any connect, TLS,
                write or read failure
        """
        with requests.Session() as http:
            response = http.request(
                self.method,
                self.url,
                headers=dict(self.headers),
                data=body.encode("utf-8"),
                timeout=self.timeout,
                verify=self.verify,
                cert=self.cert,
                proxies=self.proxies,
                allow_redirects=self.allow_redirects,
            )
            return RawResponse.from_response(response)

    def __repr__(self) -> str:
        return f"<HttpConnection {self.method} {self.url}>"


ConnectionConfigurator = Callable[[HttpConnection], Any]
"""Callback allowed to change a connection right before it is opened."""
