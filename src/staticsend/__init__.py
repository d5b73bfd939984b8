"""Static file responses with HTTP caching and range semantics."""

from .context import ByteRange, FileMetadata, ResponseContext, SendResult
from .exceptions import RedirectNotSupportedError
from .options import DotfilesPolicy, SendOptions, parse_max_age
from .ranges import is_range_fresh, parse_bytes_range
from .send import send
from .stream import FileStream
from .validators import weak_etag

__all__ = [
    "ByteRange",
    "DotfilesPolicy",
    "FileMetadata",
    "FileStream",
    "RedirectNotSupportedError",
    "ResponseContext",
    "SendOptions",
    "SendResult",
    "is_range_fresh",
    "parse_bytes_range",
    "parse_max_age",
    "send",
    "weak_etag",
]
