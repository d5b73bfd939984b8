"""HTTP service exposing the ``staticsend`` pipeline."""
from __future__ import annotations

from typing import Any

import uvicorn

from .app import create_app
from .settings import ServiceSettings
from .staticfiles import SendStaticFiles


def main(**uvicorn_kwargs: Any) -> None:
    """Run the static file service using ``uvicorn``.

    Parameters
    ----------
    **uvicorn_kwargs: Any
        Optional keyword arguments forwarded to :func:`uvicorn.run`.
    """

    settings = ServiceSettings.from_env()

    config = {
        "app": "backend.app:create_app",
        "factory": True,
        "host": settings.host,
        "port": settings.port,
        "reload": settings.reload,
    }
    config.update(uvicorn_kwargs)

    uvicorn.run(**config)


__all__ = ["create_app", "main", "SendStaticFiles", "ServiceSettings"]
