"""Unit tests for JSON-RPC 2.0 protocol models.

These tests verify Pydantic model validation of requests, notifications
and responses.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from jsonrpc_session.protocol.models import (
    JsonRpcError,
    JsonRpcErrorCode,
    JsonRpcNotification,
    JsonRpcRequest,
    JsonRpcResponse,
    create_error_response,
    create_success_response,
)


class TestJsonRpcError:
    """Tests for JsonRpcError model."""

    def test_error_with_code_and_message(self) -> None:
        """Test error with code and message."""
        error = JsonRpcError(code=-32600, message="Invalid Request")

        assert error.code == -32600
        assert error.message == "Invalid Request"
        assert error.data is None

    def test_error_data_accepts_any_json_value(self) -> None:
        """Test error data is not restricted to objects."""
        assert JsonRpcError(code=-32000, message="x", data="detail").data == "detail"
        assert JsonRpcError(code=-32000, message="x", data=[1, 2]).data == [1, 2]


class TestJsonRpcRequest:
    """Tests for JsonRpcRequest model."""

    def test_request_minimal(self) -> None:
        """Test minimal request with method only."""
        request = JsonRpcRequest(method="getServerTime")

        assert request.method == "getServerTime"
        assert request.params is None
        assert request.id is None

    def test_request_params_positional_or_named(self) -> None:
        """Test params may be a list or a dict."""
        assert JsonRpcRequest(method="sum", params=[1, 2], id=1).params == [1, 2]
        assert JsonRpcRequest(method="sum", params={"a": 1}, id=1).params == {"a": 1}

    @pytest.mark.parametrize("request_id", [0, 3.14, "abc", True, None])
    def test_request_id_types_preserved(self, request_id: object) -> None:
        """Test number, string, boolean and null ids keep their type."""
        request = JsonRpcRequest(method="ws.getTime", id=request_id)

        assert request.id == request_id
        assert type(request.id) is type(request_id)

    def test_request_empty_method_rejected(self) -> None:
        """Test empty method name fails validation."""
        with pytest.raises(ValidationError):
            JsonRpcRequest(method="", id=1)


class TestJsonRpcNotification:
    """Tests for JsonRpcNotification model."""

    def test_notification_has_no_id(self) -> None:
        """Test notifications carry no identity."""
        notification = JsonRpcNotification(method="heartbeat")

        assert not hasattr(notification, "id")

    def test_notification_empty_method_rejected(self) -> None:
        """Test empty method name fails validation."""
        with pytest.raises(ValidationError):
            JsonRpcNotification(method="")


class TestJsonRpcResponse:
    """Tests for JsonRpcResponse model."""

    def test_success_response(self) -> None:
        """Test success response."""
        response = create_success_response(0, "12:00:00")

        assert response.indicates_success is True
        assert response.result == "12:00:00"
        assert response.id == 0

    def test_null_result_is_success(self) -> None:
        """Test a null result still indicates success."""
        response = JsonRpcResponse(result=None, id=1)

        assert response.indicates_success is True

    def test_error_response(self) -> None:
        """Test error response built from a standard code."""
        response = create_error_response(None, JsonRpcErrorCode.PARSE_ERROR)

        assert response.indicates_success is False
        assert response.error.code == -32700
        assert response.error.message == "Parse error"
        assert response.id is None

    def test_result_and_error_rejected(self) -> None:
        """Test a response cannot carry both result and error."""
        with pytest.raises(ValidationError):
            JsonRpcResponse(
                result="x",
                error=JsonRpcError(code=-32603, message="Internal error"),
                id=1,
            )
