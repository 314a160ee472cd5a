"""Protocol layer for JSON-RPC sessions.

This module handles JSON-RPC 2.0 messages with no knowledge of HTTP
transport. It is responsible for:
- Request/notification/response Pydantic models
- Encoding messages to JSON text
- Decoding response text with optional leniency
- Parse error reporting
"""

from jsonrpc_session.protocol.codec import decode_response, encode
from jsonrpc_session.protocol.exceptions import ParseError, ProtocolError
from jsonrpc_session.protocol.models import (
    JsonRpcError,
    JsonRpcErrorCode,
    JsonRpcNotification,
    JsonRpcRequest,
    JsonRpcResponse,
    RequestId,
    create_error_response,
    create_success_response,
)

__all__ = [
    # Models
    "JsonRpcRequest",
    "JsonRpcNotification",
    "JsonRpcResponse",
    "JsonRpcError",
    "JsonRpcErrorCode",
    "RequestId",
    "create_success_response",
    "create_error_response",
    # Exceptions
    "ProtocolError",
    "ParseError",
    # Codec
    "encode",
    "decode_response",
]
