"""Locate the file to serve: plain files, directory indexes and extension fallbacks."""

from __future__ import annotations

import errno
import logging
import os
from dataclasses import dataclass

import aiofiles.os

from .context import FileMetadata
from .options import SendOptions

logger = logging.getLogger(__name__)

# Stat failures that mean "nothing to serve here" rather than a server fault.
_NOT_FOUND_ERRNOS = frozenset({errno.ENOENT, errno.ENAMETOOLONG, errno.ENOTDIR})


@dataclass(frozen=True, slots=True)
class LocatedFile:
    """Final path and its metadata."""

    path: str
    metadata: FileMetadata


@dataclass(frozen=True, slots=True)
class LocateFailed:
    """Terminal outcome of file lookup."""

    status: int
    error: OSError | None = None


async def stat_path(path: str) -> FileMetadata:
    """Stat ``path`` without blocking the event loop."""

    return FileMetadata.from_stat(await aiofiles.os.stat(path))


async def _first_file(candidates: list[str]) -> LocatedFile | None:
    for candidate in candidates:
        try:
            metadata = await stat_path(candidate)
        except OSError:
            continue
        if metadata.is_dir:
            continue
        return LocatedFile(path=candidate, metadata=metadata)
    return None


def _has_extension(path: str) -> bool:
    return bool(os.path.splitext(path)[1])


async def locate(path: str, options: SendOptions) -> LocatedFile | LocateFailed:
    """Resolve ``path`` to a servable file.

    A trailing-slash directory is resolved through ``options.index``; a missing
    extensionless path is retried with each of ``options.extensions``. The
    returned metadata may still describe a directory when ``path`` had no
    trailing slash; callers decide what to do with it.
    """

    trailing_slash = path.endswith(os.sep)
    try:
        metadata = await stat_path(path)
    except OSError as exc:
        if exc.errno == errno.ENOENT and not _has_extension(path) and not trailing_slash:
            found = await _first_file([f"{path}.{ext}" for ext in options.extensions])
            if found is None:
                logger.debug("No file or extension match for %s", path)
                return LocateFailed(404, exc)
            return found
        if exc.errno in _NOT_FOUND_ERRNOS:
            logger.debug("Stat failed for %s: %s", path, exc)
            return LocateFailed(404, exc)
        logger.warning("Unexpected stat failure for %s: %s", path, exc)
        return LocateFailed(500, exc)

    if trailing_slash and metadata.is_dir:
        found = await _first_file([os.path.join(path, name) for name in options.index])
        if found is None:
            logger.debug("No index file found in %s", path)
            return LocateFailed(404)
        return found

    return LocatedFile(path=path, metadata=metadata)


__all__ = ["LocateFailed", "LocatedFile", "locate", "stat_path"]
