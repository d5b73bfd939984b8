"""Lazy, bounded byte stream over a file."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

import aiofiles

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


class FileStream:
    """Async iterator over ``path`` from ``start`` to ``end`` inclusive.

    The file is opened only when iteration begins and is closed when the
    window is exhausted, on error, or when :meth:`aclose` is called.
    """

    def __init__(
        self,
        path: str,
        *,
        start: int = 0,
        end: int | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be greater than zero")
        self.path = path
        self.start = start
        self.end = end
        self.chunk_size = chunk_size
        self._iterator: AsyncIterator[bytes] | None = None
        self._closed = False

    def __repr__(self) -> str:
        return f"FileStream(path={self.path!r}, start={self.start}, end={self.end})"

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> "FileStream":
        return self

    async def __anext__(self) -> bytes:
        if self._closed:
            raise StopAsyncIteration
        if self._iterator is None:
            self._iterator = self._read()
        try:
            return await self._iterator.__anext__()
        except StopAsyncIteration:
            self._closed = True
            raise

    async def aclose(self) -> None:
        """Release the underlying file handle, if it was opened."""

        self._closed = True
        if self._iterator is not None:
            await self._iterator.aclose()  # type: ignore[attr-defined]

    async def read(self) -> bytes:
        """Collect the remaining window into memory."""

        return b"".join([chunk async for chunk in self])

    async def _read(self) -> AsyncIterator[bytes]:
        remaining = None if self.end is None else self.end - self.start + 1
        if remaining is not None and remaining <= 0:
            return
        async with aiofiles.open(self.path, "rb") as handle:
            if self.start:
                await handle.seek(self.start)
            while remaining is None or remaining > 0:
                size = self.chunk_size if remaining is None else min(self.chunk_size, remaining)
                chunk = await handle.read(size)
                if not chunk:
                    break
                if remaining is not None:
                    remaining -= len(chunk)
                yield chunk
        logger.debug("Finished streaming %s", self.path)


__all__ = ["DEFAULT_CHUNK_SIZE", "FileStream"]
