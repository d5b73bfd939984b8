"""ASGI static file handler backed by the ``staticsend`` pipeline."""
from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Mapping
from urllib.parse import quote

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response, StreamingResponse
from starlette.types import Receive, Scope, Send

from staticsend import RedirectNotSupportedError, SendOptions, SendResult, send

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ("GET", "HEAD")
_BODYLESS_STATUSES = frozenset({304, 412, 416})


def _route_path(scope: Scope) -> str:
    """Return the still percent-encoded request path relative to the mount point."""

    root_path: str = scope.get("root_path", "")
    raw_path: bytes | None = scope.get("raw_path")
    if raw_path is not None:
        path = raw_path.decode("latin-1").split("?", 1)[0]
        prefix = quote(root_path)
        if path.startswith(prefix):
            return path[len(prefix):] or "/"

    path = scope["path"]
    if root_path and path.startswith(root_path):
        path = path[len(root_path):]
    return quote(path) or "/"


class SendStaticFiles:
    """Serve files below a configured root with caching and range support."""

    def __init__(self, options: SendOptions | Mapping[str, Any]) -> None:
        self.options = options if isinstance(options, SendOptions) else SendOptions.from_raw(options)
        if self.options.root is None:
            raise RuntimeError("Static file root must be configured")

    async def __call__(self, scope: Scope, receive: Receive, send_: Send) -> None:
        assert scope["type"] == "http"
        request = Request(scope, receive)
        response = await self.handle(request.method, _route_path(scope), request.headers)
        await response(scope, receive, send_)

    async def handle(self, method: str, path: str, headers: Mapping[str, str]) -> Response:
        """Return a response for the percent-encoded asset path."""

        if method not in ALLOWED_METHODS:
            return PlainTextResponse(
                "Method Not Allowed",
                status_code=405,
                headers={"allow": ", ".join(ALLOWED_METHODS)},
            )

        try:
            result = await send(headers, path, self.options)
        except RedirectNotSupportedError:
            logger.exception("Directory requested without trailing slash: %s", path)
            raise

        return await self._to_response(method, result)

    async def _to_response(self, method: str, result: SendResult) -> Response:
        if result.stream is not None:
            if method == "HEAD":
                await result.stream.aclose()
                return Response(status_code=result.status, headers=result.headers)
            return StreamingResponse(result.stream, status_code=result.status, headers=result.headers)

        if result.status in _BODYLESS_STATUSES:
            return Response(status_code=result.status, headers=result.headers)

        return PlainTextResponse(HTTPStatus(result.status).phrase, status_code=result.status)


__all__ = ["SendStaticFiles"]
