"""Request-scoped state threaded through the send pipeline."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .headers import RequestHeaders
from .options import SendOptions

if TYPE_CHECKING:
    from .stream import FileStream


@dataclass(frozen=True, slots=True)
class ByteRange:
    """Inclusive, zero-based byte range relative to the effective content."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True, slots=True)
class FileMetadata:
    """Subset of a single ``stat`` result used by the pipeline."""

    size: int
    mtime_ns: int
    is_dir: bool

    @classmethod
    def from_stat(cls, result: os.stat_result) -> "FileMetadata":
        return cls(
            size=result.st_size,
            mtime_ns=result.st_mtime_ns,
            is_dir=stat.S_ISDIR(result.st_mode),
        )

    @property
    def mtime_ms(self) -> int:
        return self.mtime_ns // 1_000_000

    @property
    def mtime(self) -> float:
        return self.mtime_ns / 1_000_000_000


@dataclass(slots=True)
class SendResult:
    """Final outcome of a send: status, response headers and optional body stream."""

    status: int
    headers: dict[str, str]
    stream: "FileStream | None" = None


@dataclass(slots=True)
class ResponseContext:
    """Mutable accumulator for a single request.

    The context is finished once ``status`` is set; stages must not touch
    ``headers`` or ``stream`` after that.
    """

    options: SendOptions
    request_headers: RequestHeaders
    path: str | None = None
    parts: list[str] = field(default_factory=list)
    metadata: FileMetadata | None = None
    status: int | None = None
    headers: dict[str, str] = field(default_factory=dict)
    range: ByteRange | None = None
    stream: "FileStream | None" = None

    @property
    def finished(self) -> bool:
        return self.status is not None

    def finish(self, status: int) -> "ResponseContext":
        """Set the terminal status; the first status set wins."""

        if self.status is None:
            self.status = status
        return self

    def require_metadata(self) -> FileMetadata:
        if self.metadata is None:
            raise RuntimeError("file metadata is not available before the file is located")
        return self.metadata

    def require_path(self) -> str:
        if self.path is None:
            raise RuntimeError("file path is not available before the path is resolved")
        return self.path

    @property
    def response(self) -> SendResult:
        if self.status is None:
            raise RuntimeError("response requested before a status was set")
        return SendResult(status=self.status, headers=self.headers, stream=self.stream)


__all__ = ["ByteRange", "FileMetadata", "ResponseContext", "SendResult"]
