"""Raw HTTP response capture.

A :class:`RawResponse` holds everything read from one HTTP response
before any JSON-RPC interpretation: status line, every header value and
the body text. Inspectors receive it for requests and notifications alike.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import requests
from pydantic import BaseModel, ConfigDict, Field


def _header_pairs(response: requests.Response) -> tuple[tuple[str, str], ...]:
    """Collect every header line, keeping repeated names as separate entries.

    ``requests`` folds repeated headers into one comma-joined value, which
    breaks "Set-Cookie". The underlying urllib3 header dict still holds
    each line.
    """
    raw_headers: Any = getattr(response.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "iteritems"):
        return tuple((str(name), str(value)) for name, value in raw_headers.iteritems())
    return tuple((str(name), str(value)) for name, value in response.headers.items())


def _body_text(response: requests.Response, content_type: str | None) -> str:
    """Decode the body, as UTF-8 unless the content type names a charset.

    ``requests`` falls back to ISO-8859-1 for any "text/*" type without a
    charset, which would garble "text/plain" JSON.
    """
    encoding = "utf-8"
    if content_type is not None and "charset=" in content_type.lower() and response.encoding:
        encoding = response.encoding
    try:
        return response.content.decode(encoding, errors="replace")
    except LookupError:
        return response.content.decode("utf-8", errors="replace")


class RawResponse(BaseModel):
    """Unparsed HTTP response.

    Attributes:
        status_code: HTTP status code
        status_message: HTTP reason phrase
        headers: (name, value) pairs in arrival order, duplicates kept
        content: Body decoded as text
        content_length: "Content-Length" value, -1 if unknown
        content_type: "Content-Type" value, or None
        content_encoding: "Content-Encoding" value, or None
    """

    status_code: int
    status_message: str | None = None
    headers: tuple[tuple[str, str], ...] = Field(default_factory=tuple)
    content: str = ""
    content_length: int = -1
    content_type: str | None = None
    content_encoding: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_response(cls, response: requests.Response) -> RawResponse:
        """Capture a fully read ``requests`` response.

        Never raises on a non-success status code.

        Args:
            response: Response returned by ``requests``

        Returns:
            Immutable capture of the response
        """
        headers = _header_pairs(response)

        def first(name: str) -> str | None:
            wanted = name.lower()
            for key, value in headers:
                if key.lower() == wanted:
                    return value
            return None

        content_length = first("Content-Length")
        try:
            length = int(content_length) if content_length is not None else -1
        except ValueError:
            length = -1

        content_type = first("Content-Type")

        return cls(
            status_code=response.status_code,
            status_message=response.reason,
            headers=headers,
            content=_body_text(response, content_type),
            content_length=length,
            content_type=content_type,
            content_encoding=first("Content-Encoding"),
        )

    @property
    def ok(self) -> bool:
        """True if the HTTP status code is 2xx."""
        return 200 <= self.status_code < 300

    def header_fields(self) -> dict[str, list[str]]:
        """Return headers as a multimap.

        Names are grouped case-insensitively under their first-seen
        spelling; values keep their arrival order.
        """
        fields: dict[str, list[str]] = {}
        spelling: dict[str, str] = {}
        for name, value in self.headers:
            key = spelling.setdefault(name.lower(), name)
            fields.setdefault(key, []).append(value)
        return fields

    def get_all(self, name: str) -> list[str]:
        """Return every value of a header (case-insensitive)."""
        wanted = name.lower()
        return [value for key, value in self.headers if key.lower() == wanted]

    def get_header(self, name: str) -> str | None:
        """Return the first value of a header (case-insensitive), or None."""
        values = self.get_all(name)
        return values[0] if values else None

    def __repr__(self) -> str:
        return f"<RawResponse [{self.status_code}]>"


RawResponseInspector = Callable[[RawResponse], None]
"""Callback receiving the raw response of every call before interpretation."""
