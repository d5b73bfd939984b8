"""Health probe routes."""
from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    root: str | None


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """Report liveness and the directory being served."""

    options = getattr(request.app.state, "send_options", None)
    return HealthResponse(status="ok", root=options.root if options is not None else None)


__all__ = [
    "router",
]
