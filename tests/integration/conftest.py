"""
Integration Test Fixtures

Local JSON-RPC 2.0 servers over HTTP and HTTPS, run in background
threads. The HTTPS server uses a self-signed certificate generated per
test session.
"""

from __future__ import annotations

import datetime
import ipaddress
import json
import ssl
import threading
from collections.abc import Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID


class JsonRpcHandler(BaseHTTPRequestHandler):
    """Tiny JSON-RPC 2.0 endpoint with a few fixed methods.

    Methods:
        getServerTime: returns "12:00:00"
        login: sets three cookies
        whoami: echoes the request "Cookie" header
        echoHeaders: echoes selected request headers
        html: replies with a text/html page
        crash: replies 500 with an internal error
        wrongId: replies with a different id
        garbage: replies with an unparsable body
    """

    def log_message(self, format: str, *args: object) -> None:
        pass

    def _reply(
        self,
        status: int,
        body: str = "",
        content_type: str | None = "application/json",
        extra_headers: list[tuple[str, str]] | None = None,
    ) -> None:
        payload = body.encode("utf-8")
        self.send_response(status)
        if content_type is not None:
            self.send_header("Content-Type", content_type)
        for name, value in extra_headers or []:
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def do_POST(self) -> None:
        length = int(self.headers.get("Content-Length", 0))
        raw = self.rfile.read(length).decode("utf-8")
        self.server.received.append((dict(self.headers), raw))  # type: ignore[attr-defined]

        try:
            message = json.loads(raw)
        except json.JSONDecodeError:
            self._reply(
                200,
                json.dumps(
                    {"jsonrpc": "2.0", "error": {"code": -32700, "message": "Parse error"}, "id": None}
                ),
            )
            return

        if "id" not in message:
            self._reply(204, content_type=None)
            return

        method = message.get("method")
        request_id = message["id"]

        def result(value: object) -> str:
            return json.dumps({"jsonrpc": "2.0", "result": value, "id": request_id})

        if method == "getServerTime":
            self._reply(200, result("12:00:00"))
        elif method == "login":
            self._reply(
                200,
                result("welcome"),
                extra_headers=[
                    ("Set-Cookie", "sessionid=123; Path=/"),
                    ("Set-Cookie", "theme=dark"),
                    ("Set-Cookie", "lang=en; HttpOnly"),
                ],
            )
        elif method == "whoami":
            self._reply(200, result(self.headers.get("Cookie")))
        elif method == "echoHeaders":
            self._reply(
                200,
                result(
                    {
                        "content_type": self.headers.get("Content-Type"),
                        "origin": self.headers.get("Origin"),
                        "authorization": self.headers.get("Authorization"),
                    }
                ),
            )
        elif method == "html":
            self._reply(200, "<html><body>Login</body></html>", content_type="text/html")
        elif method == "crash":
            self._reply(
                500,
                json.dumps(
                    {
                        "jsonrpc": "2.0",
                        "error": {"code": -32603, "message": "Internal error"},
                        "id": None,
                    }
                ),
            )
        elif method == "wrongId":
            self._reply(200, json.dumps({"jsonrpc": "2.0", "result": 1, "id": "other"}))
        elif method == "garbage":
            self._reply(200, "this is not json", content_type="text/plain")
        else:
            self._reply(
                200,
                json.dumps(
                    {
                        "jsonrpc": "2.0",
                        "error": {"code": -32601, "message": "Method not found"},
                        "id": request_id,
                    }
                ),
            )


def _serve(server: ThreadingHTTPServer) -> Iterator[ThreadingHTTPServer]:
    server.received = []  # type: ignore[attr-defined]
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


@pytest.fixture(scope="session")
def self_signed_cert(tmp_path_factory: pytest.TempPathFactory) -> tuple[Path, Path]:
    """Generate a self-signed certificate for localhost."""
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "localhost")])
    now = datetime.datetime.now(datetime.timezone.utc)

    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=1))
        .add_extension(
            x509.SubjectAlternativeName(
                [x509.DNSName("localhost"), x509.IPAddress(ipaddress.ip_address("127.0.0.1"))]
            ),
            critical=False,
        )
        .sign(key, hashes.SHA256())
    )

    directory = tmp_path_factory.mktemp("tls")
    cert_path = directory / "cert.pem"
    key_path = directory / "key.pem"
    cert_path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    key_path.write_bytes(
        key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )
    return cert_path, key_path


@pytest.fixture
def http_server() -> Iterator[ThreadingHTTPServer]:
    """Plain HTTP JSON-RPC server on a free local port."""
    yield from _serve(ThreadingHTTPServer(("127.0.0.1", 0), JsonRpcHandler))


@pytest.fixture
def https_server(self_signed_cert: tuple[Path, Path]) -> Iterator[ThreadingHTTPServer]:
    """HTTPS JSON-RPC server using the self-signed certificate."""
    cert_path, key_path = self_signed_cert
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.load_cert_chain(cert_path, key_path)

    server = ThreadingHTTPServer(("127.0.0.1", 0), JsonRpcHandler)
    server.socket = context.wrap_socket(server.socket, server_side=True)
    yield from _serve(server)


@pytest.fixture
def http_url(http_server: ThreadingHTTPServer) -> str:
    host, port = http_server.server_address[:2]
    return f"http://{host}:{port}/jsonrpc"


@pytest.fixture
def https_url(https_server: ThreadingHTTPServer) -> str:
    port = https_server.server_address[1]
    return f"https://127.0.0.1:{port}/jsonrpc"
