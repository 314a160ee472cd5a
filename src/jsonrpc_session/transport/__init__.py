"""Transport layer for JSON-RPC sessions.

This module handles HTTP communication with no knowledge of JSON-RPC
protocol. It is responsible for:
- Building the outbound HTTP connection (headers, TLS mode, timeouts)
- Performing exactly one POST exchange per call
- Capturing the raw response for inspection
"""

from jsonrpc_session.transport.connection import ConnectionConfigurator, HttpConnection
from jsonrpc_session.transport.raw_response import RawResponse, RawResponseInspector

__all__ = [
    "HttpConnection",
    "ConnectionConfigurator",
    "RawResponse",
    "RawResponseInspector",
]
