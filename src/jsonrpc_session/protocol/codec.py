"""JSON-RPC 2.0 message codec.

Encodes requests, notifications and responses to JSON text and decodes
response text back into a :class:`JsonRpcResponse`. This is the only
place JSON text is produced or consumed; the session calls nothing else.
"""

from __future__ import annotations

import json
from collections import OrderedDict
from typing import Any

from pydantic import ValidationError

from jsonrpc_session.protocol.exceptions import ParseError
from jsonrpc_session.protocol.models import (
    JsonRpcError,
    JsonRpcNotification,
    JsonRpcRequest,
    JsonRpcResponse,
)

JSONRPC_VERSION = "2.0"

_RESPONSE_MEMBERS = frozenset({"jsonrpc", "result", "error", "id"})

Message = JsonRpcRequest | JsonRpcNotification | JsonRpcResponse


def to_json_object(message: Message) -> dict[str, Any]:
    """Build the JSON object for a message, in wire member order.

    Args:
        message: Request, notification or response

    Returns:
        Dictionary ready for ``json.dumps``

    Raises:
        TypeError: If message is not a JSON-RPC 2.0 message model
    """
    payload: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION}

    if isinstance(message, (JsonRpcRequest, JsonRpcNotification)):
        payload["method"] = message.method
        if message.params is not None:
            payload["params"] = message.params
        if isinstance(message, JsonRpcRequest):
            # Requests always carry an id, even a null one
            payload["id"] = message.id
    elif isinstance(message, JsonRpcResponse):
        if message.indicates_success:
            payload["result"] = message.result
        else:
            payload["error"] = message.error.model_dump(exclude_none=True)
        payload["id"] = message.id
    else:
        raise TypeError(f"Not a JSON-RPC 2.0 message: {type(message).__name__}")

    if message.non_std_attributes:
        for key, value in message.non_std_attributes.items():
            payload.setdefault(key, value)

    return payload


def encode(message: Message) -> str:
    """Serialize a message to compact JSON text.

    Example:
        >>> encode(JsonRpcRequest(method="getServerTime", id=0))
        '{"jsonrpc":"2.0","method":"getServerTime","id":0}'
    """
    return json.dumps(to_json_object(message), ensure_ascii=False, separators=(",", ":"))


def _is_valid_id(value: Any) -> bool:
    return value is None or isinstance(value, (bool, int, float, str))


def _parse_error_object(value: Any, text: str) -> JsonRpcError:
    if not isinstance(value, dict):
        raise ParseError("Invalid JSON-RPC 2.0 response: 'error' must be an object", text)

    code = value.get("code")
    message = value.get("message")
    if isinstance(code, bool) or not isinstance(code, int):
        raise ParseError("Invalid JSON-RPC 2.0 response: error 'code' must be an integer", text)
    if not isinstance(message, str):
        raise ParseError("Invalid JSON-RPC 2.0 response: error 'message' must be a string", text)

    return JsonRpcError(code=code, message=message, data=value.get("data"))


def decode_response(
    text: str,
    preserve_order: bool = False,
    ignore_version: bool = False,
    parse_non_std_attributes: bool = False,
) -> JsonRpcResponse:
    """Parse JSON text into a JSON-RPC 2.0 response.

    Args:
        text: Response body text
        preserve_order: Decode JSON objects as OrderedDict, keeping the
            source member order
        ignore_version: Tolerate a missing or wrong "jsonrpc" member
        parse_non_std_attributes: Keep unrecognized top-level members in
            ``non_std_attributes`` instead of rejecting the response

    Returns:
        Decoded response

    Raises:
        ParseError: If the text is not a valid JSON-RPC 2.0 response
    """
    try:
        if preserve_order:
            parsed = json.loads(text, object_pairs_hook=OrderedDict)
        else:
            parsed = json.loads(text)
    except (TypeError, ValueError) as e:
        raise ParseError(f"Invalid JSON: {e}", text) from e

    if not isinstance(parsed, dict):
        raise ParseError("Invalid JSON-RPC 2.0 response: expected a JSON object", text)

    if not ignore_version:
        if "jsonrpc" not in parsed:
            raise ParseError("Invalid JSON-RPC 2.0 response: missing 'jsonrpc' version", text)
        if parsed["jsonrpc"] != JSONRPC_VERSION:
            raise ParseError(
                f"Invalid JSON-RPC 2.0 response: unsupported version {parsed['jsonrpc']!r}",
                text,
            )

    if "id" not in parsed:
        raise ParseError("Invalid JSON-RPC 2.0 response: missing 'id'", text)
    response_id = parsed["id"]
    if not _is_valid_id(response_id):
        raise ParseError(
            "Invalid JSON-RPC 2.0 response: 'id' must be a string, number, boolean or null",
            text,
        )

    has_result = "result" in parsed
    has_error = "error" in parsed
    if has_result == has_error:
        raise ParseError(
            "Invalid JSON-RPC 2.0 response: exactly one of 'result' or 'error' is required",
            text,
        )

    extras = {k: v for k, v in parsed.items() if k not in _RESPONSE_MEMBERS}
    if extras and not parse_non_std_attributes:
        raise ParseError(
            f"Invalid JSON-RPC 2.0 response: non-standard member(s) {', '.join(extras)}",
            text,
        )

    error = _parse_error_object(parsed["error"], text) if has_error else None

    try:
        return JsonRpcResponse(
            result=parsed.get("result"),
            error=error,
            id=response_id,
            non_std_attributes=extras or None,
        )
    except ValidationError as e:
        raise ParseError(f"Invalid JSON-RPC 2.0 response: {e}", text) from e
