"""JSON-RPC 2.0 client sessions over HTTP(S)."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("jsonrpc-session")
except PackageNotFoundError:
    __version__ = "0.0.0"

from jsonrpc_session.config import SessionSettings, create_session, get_settings
from jsonrpc_session.cookies import Cookie, CookieStore, parse_set_cookie
from jsonrpc_session.exceptions import (
    BadResponseError,
    ErrorKind,
    JsonRpcSessionError,
    NetworkError,
    UnexpectedContentTypeError,
)
from jsonrpc_session.options import SessionOptions
from jsonrpc_session.protocol import (
    JsonRpcError,
    JsonRpcErrorCode,
    JsonRpcNotification,
    JsonRpcRequest,
    JsonRpcResponse,
    ParseError,
)
from jsonrpc_session.session import JsonRpcSession
from jsonrpc_session.transport import (
    ConnectionConfigurator,
    HttpConnection,
    RawResponse,
    RawResponseInspector,
)

__all__ = [
    "__version__",
    # Session
    "JsonRpcSession",
    "SessionOptions",
    "SessionSettings",
    "create_session",
    "get_settings",
    # Cookies
    "Cookie",
    "CookieStore",
    "parse_set_cookie",
    # Transport
    "HttpConnection",
    "ConnectionConfigurator",
    "RawResponse",
    "RawResponseInspector",
    # Messages
    "JsonRpcRequest",
    "JsonRpcNotification",
    "JsonRpcResponse",
    "JsonRpcError",
    "JsonRpcErrorCode",
    "ParseError",
    # Errors
    "ErrorKind",
    "JsonRpcSessionError",
    "NetworkError",
    "UnexpectedContentTypeError",
    "BadResponseError",
]
