"""Demo script showing a JSON-RPC session in action.

This script calls a JSON-RPC 2.0 endpoint and demonstrates:
- a plain request with a classified error report
- a notification
- cookie replay and raw response inspection

Usage:
    JSONRPC_SESSION_URL=http://localhost:8080/jsonrpc python examples/server_time_demo.py
"""

from jsonrpc_session import (
    JsonRpcNotification,
    JsonRpcRequest,
    JsonRpcSessionError,
    RawResponse,
    create_session,
)


def print_raw_response(raw: RawResponse) -> None:
    """Print the status line and headers of every response."""
    print(f"  <- HTTP {raw.status_code} {raw.status_message}")
    for name, values in raw.header_fields().items():
        print(f"     {name}: {', '.join(values)}")


def main():
    session = create_session()
    session.options.accept_cookies = True
    session.raw_response_inspector = print_raw_response

    print("\n" + "=" * 60)
    print(f"JSON-RPC SESSION DEMO ({session.url})")
    print("=" * 60)

    try:
        response = session.send(JsonRpcRequest(method="getServerTime", id=0))
    except JsonRpcSessionError as e:
        print(f"\n✗ {e.kind.value}: {e}")
        return

    if response.indicates_success:
        print(f"\n✓ Server time: {response.result}")
    else:
        print(f"\n✗ [{response.error.code}] {response.error.message}")

    session.send(JsonRpcNotification(method="heartbeat"))
    print("\n✓ Notification sent")

    if session.cookies:
        print("\nCookies:")
        for cookie in session.cookies:
            print(f"  {cookie}")


if __name__ == "__main__":
    main()
