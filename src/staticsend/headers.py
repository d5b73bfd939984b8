"""Request header access and HTTP header value helpers."""

from __future__ import annotations

import calendar
from collections.abc import Iterator, Mapping
from email.utils import formatdate, parsedate_tz
from typing import Callable


class RequestHeaders(Mapping[str, str]):
    """Read-only header mapping with case-insensitive names."""

    def __init__(self, raw: Mapping[str, str] | None = None) -> None:
        self._headers: dict[str, str] = {}
        for name, value in (raw or {}).items():
            self._headers[name.lower()] = value

    def __getitem__(self, name: str) -> str:
        return self._headers[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._headers

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return f"RequestHeaders({self._headers!r})"


def parse_token_list(value: str, matches: Callable[[str], bool]) -> bool:
    """Return ``True`` if any comma-separated token of ``value`` satisfies ``matches``.

    Spaces around tokens are ignored and empty tokens are skipped.
    """

    for token in value.split(","):
        token = token.strip(" ")
        if token and matches(token):
            return True
    return False


def parse_http_date(value: str | None) -> int | None:
    """Parse an HTTP date into a POSIX timestamp, or ``None`` if unparsable."""

    if not value:
        return None
    try:
        parsed = parsedate_tz(value)
    except (TypeError, ValueError, IndexError):
        return None
    if parsed is None:
        return None
    offset = parsed[9] or 0
    try:
        return calendar.timegm(parsed[:6] + (0, 1, -1)) - offset
    except (OverflowError, ValueError):
        return None


def format_http_date(timestamp: float) -> str:
    """Format a POSIX timestamp as an IMF-fixdate (``Sun, 06 Nov 1994 08:49:37 GMT``)."""

    return formatdate(timestamp, usegmt=True)


__all__ = [
    "RequestHeaders",
    "format_http_date",
    "parse_http_date",
    "parse_token_list",
]
