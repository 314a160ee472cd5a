"""Session cookie store.

Cookies arrive in "Set-Cookie" response headers and are replayed in a
single "Cookie" request header on later calls. The store is a set keyed
by cookie identity (name, domain, path) and does no expiry, domain or
path scoping of its own.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from http.cookies import CookieError, SimpleCookie

import structlog
from pydantic import BaseModel, ConfigDict

logger = structlog.get_logger()


class Cookie(BaseModel):
    """A cookie parsed from a "Set-Cookie" header.

    Two cookies are equal when they share a name and domain (both
    compared case-insensitively) and a path, whatever their values.
    """

    name: str
    value: str
    domain: str | None = None
    path: str | None = None
    expires: str | None = None
    max_age: int | None = None
    secure: bool = False
    http_only: bool = False
    same_site: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def identity(self) -> tuple[str, str | None, str | None]:
        """Key the store deduplicates on."""
        domain = self.domain.lower() if self.domain else None
        return (self.name.lower(), domain, self.path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cookie):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)

    def to_header(self) -> str:
        """Return the "name=value" pair sent in a "Cookie" header."""
        return f"{self.name}={self.value}"

    def __str__(self) -> str:
        return self.to_header()


def _parse_max_age(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


def parse_set_cookie(header_value: str) -> list[Cookie]:
    """Parse one "Set-Cookie" header value into cookies.

    Malformed values yield an empty list rather than an error.

    Args:
        header_value: Raw header value, e.g. "sessionid=123; Path=/"

    Returns:
        Parsed cookies (usually one)

    Example:
        >>> [c.to_header() for c in parse_set_cookie("sessionid=123; Path=/")]
        ['sessionid=123']
    """
    jar: SimpleCookie = SimpleCookie()
    try:
        jar.load(header_value)
    except CookieError:
        logger.debug("cookie_skipped", set_cookie=header_value)
        return []

    cookies: list[Cookie] = []
    for name, morsel in jar.items():
        cookies.append(
            Cookie(
                name=name,
                value=morsel.coded_value,
                domain=morsel["domain"] or None,
                path=morsel["path"] or None,
                expires=morsel["expires"] or None,
                max_age=_parse_max_age(morsel["max-age"]) if morsel["max-age"] else None,
                secure=bool(morsel["secure"]),
                http_only=bool(morsel["httponly"]),
                same_site=morsel["samesite"] or None,
            )
        )

    if not cookies:
        logger.debug("cookie_skipped", set_cookie=header_value)
    return cookies


class CookieStore:
    """Thread-safe, deduplicated set of session cookies.

    Insertion order is kept so the rebuilt "Cookie" header is stable. The
    first cookie stored under an identity wins; a cookie arriving again
    under the same identity does not change the stored value.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cookies: dict[tuple[str, str | None, str | None], Cookie] = {}

    def merge(self, cookies: Iterable[Cookie]) -> None:
        """Add cookies whose identity is not stored yet.

        A cookie already in the store keeps its value; later cookies with
        the same identity are ignored.
        """
        with self._lock:
            for cookie in cookies:
                self._cookies.setdefault(cookie.identity, cookie)

    def store_set_cookie_headers(self, headers: Iterable[tuple[str | None, str | None]]) -> int:
        """Parse and merge every "Set-Cookie" entry of a header list.

        Header names are matched case-insensitively. Entries with a null
        name or value and malformed cookie strings are skipped.

        Args:
            headers: (name, value) pairs, duplicates preserved

        Returns:
            Number of cookies parsed and merged
        """
        parsed: list[Cookie] = []
        for name, value in headers:
            if name is None or value is None or name.lower() != "set-cookie":
                continue
            parsed.extend(parse_set_cookie(value))

        self.merge(parsed)
        return len(parsed)

    def snapshot(self) -> frozenset[Cookie]:
        """Return the stored cookies as an immutable set."""
        with self._lock:
            return frozenset(self._cookies.values())

    def header_value(self) -> str:
        """Build the "Cookie" request header value.

        Returns:
            "name=value" pairs joined with "; ", empty if no cookies
        """
        with self._lock:
            return "; ".join(cookie.to_header() for cookie in self._cookies.values())

    def clear(self) -> None:
        """Remove all cookies."""
        with self._lock:
            self._cookies.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cookies)

    def __iter__(self) -> Iterator[Cookie]:
        with self._lock:
            return iter(list(self._cookies.values()))

    def __contains__(self, cookie: object) -> bool:
        if not isinstance(cookie, Cookie):
            return False
        with self._lock:
            return cookie.identity in self._cookies
