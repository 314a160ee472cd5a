"""Root-level pytest configuration and shared fixtures."""

from __future__ import annotations

import io
from collections.abc import Callable, Iterable, Mapping
from http import HTTPStatus

import pytest
import requests
from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers
from urllib3 import HTTPHeaderDict, HTTPResponse

ResponseFactory = Callable[..., requests.Response]


def build_response(
    status_code: int = 200,
    headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
    body: str = "",
    url: str = "http://localhost:8080/jsonrpc",
) -> requests.Response:
    """Build a fully read ``requests.Response`` the way HTTPAdapter does.

    Headers may be given as (name, value) pairs to repeat a name, e.g.
    several "Set-Cookie" lines.
    """
    pairs = headers.items() if isinstance(headers, Mapping) else (headers or [])
    raw_headers = HTTPHeaderDict()
    for name, value in pairs:
        raw_headers.add(name, value)

    content = body.encode("utf-8")

    response = requests.Response()
    response.status_code = status_code
    response.reason = HTTPStatus(status_code).phrase
    response.headers = CaseInsensitiveDict(raw_headers)
    response.raw = HTTPResponse(
        body=io.BytesIO(content),
        headers=raw_headers,
        status=status_code,
        preload_content=False,
    )
    response._content = content
    response.encoding = get_encoding_from_headers(response.headers)
    response.url = url
    return response


@pytest.fixture
def make_response() -> ResponseFactory:
    """Factory fixture for ``requests.Response`` objects."""
    return build_response


@pytest.fixture(autouse=True)
def clear_settings_cache() -> None:
    """Reset cached environment settings between tests."""
    from jsonrpc_session.config import get_settings

    get_settings.cache_clear()
