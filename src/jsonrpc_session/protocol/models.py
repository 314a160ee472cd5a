"""JSON-RPC 2.0 protocol models.

This module defines Pydantic models for the JSON-RPC 2.0 messages a client
session sends and receives: requests, notifications and responses.

References:
    JSON-RPC 2.0 Specification: https://www.jsonrpc.org/specification
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Identity a request attaches to itself. None is legal for requests and is
# echoed back by servers that could not read the request.
RequestId = Union[bool, int, float, str, None]


class JsonRpcErrorCode(int, Enum):
    """Standard JSON-RPC 2.0 error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class JsonRpcError(BaseModel):
    """JSON-RPC 2.0 error object.

    Attributes:
        code: Error code (integer)
        message: Human-readable error message
        data: Additional error information (optional, any JSON value)

    Example:
        >>> error = JsonRpcError(code=-32600, message="Invalid Request")
        >>> print(error.code)
        -32600
    """

    code: int = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    data: Any = Field(default=None, description="Additional error data")


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request object.

    Attributes:
        method: Method name to invoke
        params: Positional (list) or named (dict) parameters, or None
        id: Request identifier; None is a legal identity
        non_std_attributes: Extra top-level members to send along

    Example:
        >>> request = JsonRpcRequest(method="getServerTime", id=0)
        >>> print(request.id)
        0
    """

    method: str = Field(..., description="Method name to invoke")
    params: dict[str, Any] | list[Any] | None = Field(
        default=None, description="Method parameters"
    )
    id: RequestId = Field(default=None, description="Request identifier")
    non_std_attributes: dict[str, Any] | None = Field(
        default=None, description="Non-standard top-level members"
    )

    model_config = ConfigDict(frozen=False)

    @field_validator("method")
    @classmethod
    def validate_method(cls, v: str) -> str:
        """Validate method name is not empty."""
        if not v:
            raise ValueError("Method name must be a non-empty string")
        return v


class JsonRpcNotification(BaseModel):
    """JSON-RPC 2.0 notification object.

    A request without an identity. The server sends no reply payload.
    """

    method: str = Field(..., description="Method name to invoke")
    params: dict[str, Any] | list[Any] | None = Field(
        default=None, description="Method parameters"
    )
    non_std_attributes: dict[str, Any] | None = Field(
        default=None, description="Non-standard top-level members"
    )

    model_config = ConfigDict(frozen=False)

    @field_validator("method")
    @classmethod
    def validate_method(cls, v: str) -> str:
        """Validate method name is not empty."""
        if not v:
            raise ValueError("Method name must be a non-empty string")
        return v


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response object.

    Either ``result`` or ``error`` is meaningful: a response with an error
    object indicates failure, any other response indicates success (a
    success result may legitimately be null).

    Attributes:
        result: Method result (any JSON value)
        error: Error object (present on failure)
        id: Request identifier echoed by the server
        non_std_attributes: Unrecognized top-level members, when retained

    Example:
        >>> response = JsonRpcResponse(result="12:00:00", id=0)
        >>> response.indicates_success
        True
    """

    result: Any = Field(default=None, description="Method result")
    error: JsonRpcError | None = Field(default=None, description="Error object")
    id: RequestId = Field(default=None, description="Request identifier")
    non_std_attributes: dict[str, Any] | None = Field(
        default=None, description="Non-standard top-level members"
    )

    model_config = ConfigDict(frozen=False)

    @model_validator(mode="after")
    def validate_result_or_error(self) -> JsonRpcResponse:
        """Reject responses carrying both a result and an error."""
        if self.error is not None and self.result is not None:
            raise ValueError("Response cannot have both result and error")
        return self

    @property
    def indicates_success(self) -> bool:
        """Check if this response reports success."""
        return self.error is None


def create_success_response(request_id: RequestId, result: Any) -> JsonRpcResponse:
    """Create a successful JSON-RPC response."""
    return JsonRpcResponse(id=request_id, result=result)


def create_error_response(
    request_id: RequestId,
    error_code: JsonRpcErrorCode,
    message: str | None = None,
    data: Any = None,
) -> JsonRpcResponse:
    """Create a standard JSON-RPC error response."""
    error_messages = {
        JsonRpcErrorCode.PARSE_ERROR: "Parse error",
        JsonRpcErrorCode.INVALID_REQUEST: "Invalid Request",
        JsonRpcErrorCode.METHOD_NOT_FOUND: "Method not found",
        JsonRpcErrorCode.INVALID_PARAMS: "Invalid params",
        JsonRpcErrorCode.INTERNAL_ERROR: "Internal error",
    }

    return JsonRpcResponse(
        id=request_id,
        error=JsonRpcError(
            code=error_code.value,
            message=message or error_messages[error_code],
            data=data,
        ),
    )
