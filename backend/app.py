"""FastAPI application factory for the static file service."""
from __future__ import annotations

from fastapi import FastAPI

from .api.health import router as health_router
from .settings import ServiceSettings
from .staticfiles import SendStaticFiles


def create_app(settings: ServiceSettings | None = None) -> FastAPI:
    """Create a FastAPI instance serving ``settings.root`` at ``/``."""

    settings = settings or ServiceSettings.from_env()
    options = settings.send_options()

    app = FastAPI(title="staticsend", version="0.1.0")
    app.state.settings = settings
    app.state.send_options = options

    app.include_router(health_router)
    app.mount("/", SendStaticFiles(options), name="static")

    return app


__all__ = ["create_app"]
