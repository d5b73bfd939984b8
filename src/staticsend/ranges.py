"""Byte-range negotiation: If-Range freshness and ``Range: bytes=`` parsing."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from .context import ByteRange, ResponseContext
from .headers import parse_http_date
from .validators import effective_length, last_modified, weak_etag

logger = logging.getLogger(__name__)

BYTES_RANGE_RE = re.compile(r"^ *bytes=", re.IGNORECASE)
_RANGE_ELEMENT_RE = re.compile(r"^(\d*)-(\d*)$")


def content_range(length: int, byte_range: ByteRange | None = None) -> str:
    if byte_range is None:
        return f"bytes */{length}"
    return f"bytes {byte_range.start}-{byte_range.end}/{length}"


def parse_bytes_range(length: int, header: str) -> list[ByteRange] | None:
    """Parse a ``bytes=`` range set against a representation of ``length`` bytes.

    Returns ``None`` when the header is syntactically malformed. Otherwise
    returns the satisfiable ranges in request order. Unsatisfiable ranges
    are dropped.
    """

    match = BYTES_RANGE_RE.match(header)
    if match is None:
        return None

    elements = [element.strip() for element in header[match.end():].split(",")]
    elements = [element for element in elements if element]
    if not elements:
        return None

    ranges: list[ByteRange] = []
    for element in elements:
        parsed = _RANGE_ELEMENT_RE.match(element)
        if parsed is None or parsed.group(0) == "-":
            return None
        first, last = parsed.groups()
        if first == "":
            suffix = int(last)
            if suffix == 0:
                continue
            start, end = max(0, length - suffix), length - 1
        else:
            start = int(first)
            end = int(last) if last else length - 1
            end = min(end, length - 1)
        if start > end or start >= length:
            continue
        ranges.append(ByteRange(start, end))
    return ranges


def is_range_fresh(headers: Mapping[str, str], etag: str, modified: str | None) -> bool:
    """Whether the representation described by If-Range still matches the file."""

    if_range = headers.get("if-range")
    if if_range is None:
        return True

    if '"' in if_range:
        return if_range == etag

    if_range_at = parse_http_date(if_range)
    if if_range_at is None:
        return False
    modified_at = parse_http_date(modified)
    if modified_at is None:
        return False
    return modified_at <= if_range_at


def apply_range(context: ResponseContext) -> ResponseContext:
    """Select a single byte range, finish with 416, or leave the full response."""

    if context.finished or not context.options.accept_ranges:
        return context

    header = context.request_headers.get("range")
    if header is None or not BYTES_RANGE_RE.match(header):
        return context

    metadata = context.require_metadata()
    if not is_range_fresh(context.request_headers, weak_etag(metadata), last_modified(metadata)):
        logger.debug("Ignoring stale range request for %s", context.path)
        return context

    length = effective_length(metadata, context.options)
    ranges = parse_bytes_range(length, header)
    if ranges is None:
        logger.debug("Ignoring malformed range %r", header)
        return context
    if len(ranges) > 1:
        logger.debug("Multiple ranges requested for %s, serving full content", context.path)
        return context
    if not ranges:
        logger.debug("Range %r not satisfiable for %s", header, context.path)
        context.headers["content-range"] = content_range(length)
        return context.finish(416)

    context.range = ranges[0]
    return context


__all__ = [
    "BYTES_RANGE_RE",
    "apply_range",
    "content_range",
    "is_range_fresh",
    "parse_bytes_range",
]
