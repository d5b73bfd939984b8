"""Resolve a static file request into a status, headers and a body stream."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .conditional import apply_conditional_get
from .context import ResponseContext, SendResult
from .exceptions import RedirectNotSupportedError
from .headers import RequestHeaders
from .locator import LocateFailed, locate
from .options import SendOptions
from .paths import PathRejected, resolve_path
from .ranges import apply_range, content_range
from .stream import FileStream
from .validators import build_headers, effective_length

logger = logging.getLogger(__name__)


def _coerce_options(options: SendOptions | Mapping[str, Any] | None) -> SendOptions:
    if isinstance(options, SendOptions):
        return options
    return SendOptions.from_raw(options)


def prepare_path(context: ResponseContext, raw_path: str) -> ResponseContext:
    resolved = resolve_path(raw_path, context.options)
    if isinstance(resolved, PathRejected):
        return context.finish(resolved.status)
    context.path = resolved.path
    context.parts = list(resolved.parts)
    return context


async def locate_file(context: ResponseContext) -> ResponseContext:
    if context.finished or context.path is None:
        return context
    located = await locate(context.path, context.options)
    if isinstance(located, LocateFailed):
        return context.finish(located.status)
    context.path = located.path
    context.metadata = located.metadata
    return context


def apply_headers(context: ResponseContext) -> ResponseContext:
    if context.finished or context.path is None:
        return context
    context.headers.update(build_headers(context.path, context.require_metadata(), context.options))
    return context


def respond(context: ResponseContext) -> SendResult:
    """Open the body stream for the selected window and finish with 200 or 206."""

    if context.finished:
        return context.response

    options = context.options
    path = context.require_path()
    length = effective_length(context.require_metadata(), options)

    if context.range is None:
        context.headers["content-length"] = str(length)
        context.stream = FileStream(path, start=options.start, end=options.end)
        return context.finish(200).response

    byte_range = context.range
    context.headers["content-range"] = content_range(length, byte_range)
    context.headers["content-length"] = str(byte_range.length)
    context.stream = FileStream(
        path,
        start=options.start + byte_range.start,
        end=options.start + byte_range.end,
    )
    return context.finish(206).response


async def send(
    headers: Mapping[str, str] | None,
    path: str,
    options: SendOptions | Mapping[str, Any] | None = None,
) -> SendResult:
    """Run the send pipeline for one request.

    Parameters
    ----------
    headers:
        Request headers; names are matched case-insensitively.
    path:
        The raw, still percent-encoded request path.
    options:
        A :class:`SendOptions` instance, or a raw mapping of options.

    Returns
    -------
    SendResult
        The status, the response headers and, for 200/206, a lazy
        :class:`FileStream`.

    Raises
    ------
    RedirectNotSupportedError
        If ``path`` names a directory without a trailing slash.
    """

    context = ResponseContext(
        options=_coerce_options(options),
        request_headers=RequestHeaders(headers),
    )

    prepare_path(context, path)
    if context.finished:
        return context.response

    await locate_file(context)
    if context.finished:
        return context.response

    if context.require_metadata().is_dir:
        raise RedirectNotSupportedError(context.path or path)

    apply_headers(context)
    apply_conditional_get(context)
    if context.finished:
        return context.response

    apply_range(context)
    return respond(context)


__all__ = ["send"]
