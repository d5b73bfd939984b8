"""Cache validators and representation headers derived from file metadata."""

from __future__ import annotations

import mimetypes
import re

from .context import FileMetadata
from .headers import format_http_date
from .options import SendOptions

DEFAULT_CONTENT_TYPE = "application/octet-stream"
_UTF8_TYPE_RE = re.compile(r"^(?:text/|application/(?:javascript|json))", re.IGNORECASE)


def weak_etag(metadata: FileMetadata) -> str:
    """Weak entity-tag built from the size and millisecond mtime, both in hex."""

    return f'W/"{metadata.size:x}-{metadata.mtime_ms:x}"'


def last_modified(metadata: FileMetadata) -> str:
    return format_http_date(metadata.mtime)


def is_utf8_mime_type(mime_type: str) -> bool:
    return bool(_UTF8_TYPE_RE.match(mime_type))


def content_type(path: str) -> str:
    """Guess the MIME type from the file extension, adding a charset for text types."""

    mime_type, _ = mimetypes.guess_type(path, strict=False)
    mime_type = mime_type or DEFAULT_CONTENT_TYPE
    if is_utf8_mime_type(mime_type):
        mime_type += "; charset=UTF-8"
    return mime_type


def cache_control(options: SendOptions) -> str:
    value = f"public, max-age={options.max_age // 1000}"
    if options.immutable:
        value += ", immutable"
    return value


def effective_length(metadata: FileMetadata, options: SendOptions) -> int:
    """Length of the content after applying the configured ``start``/``end`` window."""

    length = max(0, metadata.size - options.start)
    if options.end is not None:
        length = min(length, max(0, options.end - options.start + 1))
    return length


def build_headers(path: str, metadata: FileMetadata, options: SendOptions) -> dict[str, str]:
    """Representation headers emitted for every located file."""

    headers: dict[str, str] = {}
    if options.accept_ranges:
        headers["accept-ranges"] = "bytes"
    if options.cache_control:
        headers["cache-control"] = cache_control(options)
    if options.last_modified:
        headers["last-modified"] = last_modified(metadata)
    if options.etag:
        headers["etag"] = weak_etag(metadata)
    headers["content-type"] = content_type(path)
    return headers


__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "build_headers",
    "cache_control",
    "content_type",
    "effective_length",
    "is_utf8_mime_type",
    "last_modified",
    "weak_etag",
]
