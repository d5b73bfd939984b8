"""Service settings assembled from ``STATICSEND_*`` environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from staticsend import SendOptions


def _bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _list(env: Mapping[str, str], name: str, default: list[str]) -> list[str]:
    raw = env.get(name)
    if raw is None:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(slots=True)
class ServiceSettings:
    """Runtime configuration for the static file service."""

    root: Path = field(default_factory=lambda: Path("public").resolve())
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False
    options: dict[str, object] = field(default_factory=dict)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "ServiceSettings":
        """Build settings from environment overrides."""

        env = os.environ if env is None else env
        root = Path(env.get("STATICSEND_ROOT", "public")).expanduser()
        options: dict[str, object] = {
            "acceptRanges": _bool(env, "STATICSEND_ACCEPT_RANGES", True),
            "cacheControl": _bool(env, "STATICSEND_CACHE_CONTROL", True),
            "etag": _bool(env, "STATICSEND_ETAG", True),
            "immutable": _bool(env, "STATICSEND_IMMUTABLE", True),
            "lastModified": _bool(env, "STATICSEND_LAST_MODIFIED", True),
            "dotfiles": env.get("STATICSEND_DOTFILES", "ignore"),
            "index": _list(env, "STATICSEND_INDEX", ["index.html"]),
            "extensions": _list(env, "STATICSEND_EXTENSIONS", []),
            "maxAge": env.get("STATICSEND_MAX_AGE", "0"),
        }
        return cls(
            root=root if root.is_absolute() else root.resolve(),
            host=env.get("STATICSEND_HOST", "0.0.0.0"),
            port=_int(env, "STATICSEND_PORT", 8000),
            reload=_bool(env, "STATICSEND_RELOAD", False),
            options=options,
        )

    def send_options(self) -> SendOptions:
        """Validate and freeze the options for the static mount."""

        return SendOptions.from_raw({**self.options, "root": str(self.root)})


__all__ = ["ServiceSettings"]
