"""Decode, validate and normalise a requested path against the configured root."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from urllib.parse import unquote

from .options import DotfilesPolicy, SendOptions

logger = logging.getLogger(__name__)

UP_PATH_RE = re.compile(r"(?:^|[\\/])\.\.(?:[\\/]|$)")
_MALFORMED_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True, slots=True)
class ResolvedPath:
    """Absolute filesystem path plus the pre-join segments used for dotfile checks."""

    path: str
    parts: tuple[str, ...]

    @property
    def trailing_slash(self) -> bool:
        return self.path.endswith(os.sep)


@dataclass(frozen=True, slots=True)
class PathRejected:
    """Terminal outcome of path resolution."""

    status: int
    reason: str


def decode_path(raw: str) -> str | None:
    """Percent-decode ``raw`` strictly; ``None`` on a malformed escape or invalid UTF-8."""

    if _MALFORMED_ESCAPE_RE.search(raw):
        return None
    try:
        return unquote(raw, errors="strict")
    except UnicodeDecodeError:
        return None


def _normalize(path: str) -> str:
    normalized = os.path.normpath(path)
    if path.endswith(os.sep) and not normalized.endswith(os.sep):
        normalized += os.sep
    return normalized


def contains_dotfile(parts: tuple[str, ...]) -> bool:
    return any(len(part) > 1 and part.startswith(".") and part != ".." for part in parts)


def resolve_path(raw: str, options: SendOptions) -> ResolvedPath | PathRejected:
    """Turn the raw request path into a filesystem path, or reject it."""

    path = decode_path(raw)
    if path is None:
        logger.debug("Rejecting undecodable path %r", raw)
        return PathRejected(400, "malformed path")

    if "\0" in path:
        logger.debug("Rejecting path with NUL byte %r", raw)
        return PathRejected(400, "null byte in path")

    if options.root is not None and path:
        path = _normalize("." + os.sep + path)

    if UP_PATH_RE.search(path):
        logger.debug('Rejecting malicious path "%s"', path)
        return PathRejected(403, "malicious path")

    if options.root is None:
        path = _normalize(path)

    parts = tuple(path.split(os.sep))

    if options.root is not None:
        path = _normalize(os.path.join(options.root, path))
    else:
        trailing = path.endswith(os.sep)
        path = os.path.abspath(path)
        if trailing and not path.endswith(os.sep):
            path += os.sep

    if options.dotfiles is not DotfilesPolicy.ALLOW and contains_dotfile(parts):
        if options.dotfiles is DotfilesPolicy.DENY:
            logger.debug('Dotfile "%s" denied', path)
            return PathRejected(403, "dotfile denied")
        logger.debug('Dotfile "%s" ignored', path)
        return PathRejected(404, "dotfile ignored")

    return ResolvedPath(path=path, parts=parts)


__all__ = [
    "PathRejected",
    "ResolvedPath",
    "UP_PATH_RE",
    "contains_dotfile",
    "decode_path",
    "resolve_path",
]
