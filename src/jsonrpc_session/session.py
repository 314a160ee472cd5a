"""JSON-RPC 2.0 client session over HTTP(S).

The session posts requests and notifications to one endpoint, replays
cookies, checks the response content type and correlates response
identities with request identities. Every failure surfaces as exactly
one classified error; nothing is retried.
"""

from __future__ import annotations

from typing import overload
from urllib.parse import urlparse

import requests
import structlog

from jsonrpc_session.cookies import Cookie, CookieStore
from jsonrpc_session.exceptions import (
    BadResponseError,
    NetworkError,
    UnexpectedContentTypeError,
)
from jsonrpc_session.options import SessionOptions
from jsonrpc_session.protocol.codec import decode_response, encode
from jsonrpc_session.protocol.exceptions import ParseError
from jsonrpc_session.protocol.models import (
    JsonRpcErrorCode,
    JsonRpcNotification,
    JsonRpcRequest,
    JsonRpcResponse,
    RequestId,
)
from jsonrpc_session.transport.connection import ConnectionConfigurator, HttpConnection
from jsonrpc_session.transport.raw_response import RawResponse, RawResponseInspector

logger = structlog.get_logger()

# Error codes a server may return before it could read the request id
_ID_EXEMPT_ERROR_CODES = frozenset(
    {
        JsonRpcErrorCode.PARSE_ERROR.value,
        JsonRpcErrorCode.INVALID_REQUEST.value,
        JsonRpcErrorCode.INTERNAL_ERROR.value,
    }
)


def _validate_url(url: str) -> str:
    if urlparse(url).scheme not in ("http", "https"):
        raise ValueError("The URL protocol must be HTTP or HTTPS")
    return url


def id_to_string(value: RequestId) -> str:
    """Return the string form used to compare request and response ids.

    Booleans and null use their JSON spelling, so "true" and true compare equal.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def ids_match(request_id: RequestId, response: JsonRpcResponse) -> bool:
    """Check whether a response answers a request with the given id.

    Args:
        request_id: Identity of the sent request
        response: Decoded response

    Returns:
        True if both ids are null, if both are non-null with the same
        string form, or if the response is a parse, invalid request or
        internal error (the server may not have read the request id)
    """
    response_id = response.id

    if request_id is not None and response_id is not None:
        if id_to_string(request_id) == id_to_string(response_id):
            return True
    elif request_id is None and response_id is None:
        return True

    return not response.indicates_success and response.error.code in _ID_EXEMPT_ERROR_CODES


class JsonRpcSession:
    """Client session to a JSON-RPC 2.0 endpoint over HTTP(S).

    Args:
        url: Endpoint URL, scheme http or https
        options: Session options (default: ``SessionOptions()``)
        connection_configurator: Optional callback to adjust each
            outbound connection (headers, timeout) before it is opened
        raw_response_inspector: Optional callback receiving each raw
            response before interpretation

    Example:
        >>> session = JsonRpcSession("http://jsonrpc.example.com:8080")
        >>> response = session.send(JsonRpcRequest(method="getServerTime", id=0))
        >>> print(response.result)
        '12:00:00'
    """

    def __init__(
        self,
        url: str,
        options: SessionOptions | None = None,
        connection_configurator: ConnectionConfigurator | None = None,
        raw_response_inspector: RawResponseInspector | None = None,
    ) -> None:
        """Initialize session.

        Raises:
            ValueError: If the URL scheme is not http or https
        """
        self._url = _validate_url(url)
        self._options = options if options is not None else SessionOptions()
        self.connection_configurator = connection_configurator
        self.raw_response_inspector = raw_response_inspector
        self._cookies = CookieStore()

    @property
    def url(self) -> str:
        """Endpoint URL."""
        return self._url

    @url.setter
    def url(self, value: str) -> None:
        self._url = _validate_url(value)

    @property
    def options(self) -> SessionOptions:
        """Session options, read at the start of every call."""
        return self._options

    @options.setter
    def options(self, value: SessionOptions) -> None:
        if value is None:
            raise TypeError("Client session options must not be None")
        self._options = value

    @property
    def cookies(self) -> frozenset[Cookie]:
        """Snapshot of the cookies stored so far."""
        return self._cookies.snapshot()

    def _open_connection(self, options: SessionOptions) -> HttpConnection:
        """Build the outbound connection: headers, TLS mode, configurator."""
        connection = HttpConnection(self._url)

        if options.request_content_type is not None:
            connection.headers["Content-Type"] = options.request_content_type

        if options.origin is not None:
            connection.headers["Origin"] = options.origin

        if options.accept_cookies:
            cookie_header = self._cookies.header_value()
            if cookie_header:
                connection.headers["Cookie"] = cookie_header

        if connection.uses_tls and options.trust_all_certificates:
            connection.trust_all_certificates()

        if self.connection_configurator is not None:
            self.connection_configurator(connection)

        return connection

    def _exchange(self, body: str, options: SessionOptions) -> RawResponse:
        """Run one HTTP exchange, inspect the response and store cookies.

        Raises:
            NetworkError: On any connect, write or read failure
        """
        try:
            connection = self._open_connection(options)
            raw_response = connection.exchange(body)
        except requests.exceptions.RequestException as e:
            logger.warning("jsonrpc_network_error", url=self._url, error=str(e))
            raise NetworkError("Network exception", cause=e) from e

        if self.raw_response_inspector is not None:
            self.raw_response_inspector(raw_response)

        if options.accept_cookies:
            stored = self._cookies.store_set_cookie_headers(raw_response.headers)
            if stored:
                logger.debug("jsonrpc_cookies_stored", url=self._url, count=stored)

        return raw_response

    def send_request(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Send a request and return the correlated response.

        Args:
            request: JSON-RPC 2.0 request; its id may be None

        Returns:
            Decoded response, success or error

        Raises:
            NetworkError: Connection, write or read failure
            UnexpectedContentTypeError: Response content type not allowed
            BadResponseError: Invalid JSON-RPC 2.0 response or ID mismatch
            UnicodeEncodeError: A connection configurator set a header value
                that is not ISO-8859-1 encodable (not classified)
        """
        options = self._options.model_copy(deep=True)
        logger.debug("jsonrpc_request", url=self._url, method=request.method, id=request.id)

        raw_response = self._exchange(encode(request), options)

        if not options.is_allowed_response_content_type(raw_response.content_type):
            logger.warning(
                "jsonrpc_unexpected_content_type",
                url=self._url,
                content_type=raw_response.content_type,
            )
            raise UnexpectedContentTypeError(raw_response.content_type)

        try:
            response = decode_response(
                raw_response.content,
                preserve_order=options.preserve_parse_order,
                ignore_version=options.ignore_version,
                parse_non_std_attributes=options.parse_non_std_attributes,
            )
        except ParseError as e:
            logger.warning("jsonrpc_bad_response", url=self._url, error=e.message)
            raise BadResponseError("Invalid JSON-RPC 2.0 response", cause=e) from e

        if not ids_match(request.id, response):
            logger.warning(
                "jsonrpc_id_mismatch",
                url=self._url,
                request_id=request.id,
                response_id=response.id,
            )
            raise BadResponseError(
                "Invalid JSON-RPC 2.0 response: ID mismatch: "
                f"Returned {id_to_string(response.id)}, expected {id_to_string(request.id)}"
            )

        return response

    def send_notification(self, notification: JsonRpcNotification) -> None:
        """Send a notification.

        The HTTP response is read and passed to the inspector, and its
        cookies are stored, but it is never decoded.

        Raises:
            NetworkError: Connection, write or read failure
        """
        options = self._options.model_copy(deep=True)
        logger.debug("jsonrpc_notification", url=self._url, method=notification.method)

        self._exchange(encode(notification), options)

    @overload
    def send(self, message: JsonRpcRequest) -> JsonRpcResponse: ...

    @overload
    def send(self, message: JsonRpcNotification) -> None: ...

    def send(self, message: JsonRpcRequest | JsonRpcNotification) -> JsonRpcResponse | None:
        """Send a request or a notification.

        Raises:
            TypeError: If message is neither a request nor a notification
        """
        if isinstance(message, JsonRpcRequest):
            return self.send_request(message)
        if isinstance(message, JsonRpcNotification):
            self.send_notification(message)
            return None
        raise TypeError(f"Cannot send {type(message).__name__}; expected a request or notification")

    def __repr__(self) -> str:
        return f"<JsonRpcSession {self._url}>"
