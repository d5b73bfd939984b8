"""Shared pytest fixtures for the send pipeline and service tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from staticsend import SendOptions

# 2020-09-13T12:26:40.123Z
FIXED_MTIME_NS = 1_600_000_000_123_000_000
FIXED_LAST_MODIFIED = "Sun, 13 Sep 2020 12:26:40 GMT"


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    os.utime(path, ns=(FIXED_MTIME_NS, FIXED_MTIME_NS))
    return path


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def fixtures(tmp_path: Path) -> Path:
    """Build a small document root with files, indexes and dotfiles."""

    root = tmp_path / "public"
    _write(root / "name.txt", "tobi")
    _write(root / "nums.txt", "123456789")
    _write(root / "empty.txt", "")
    _write(root / "todo.html", "<li>groceries</li>")
    _write(root / "data.bin", "\x00\x01")
    _write(root / "readme.md.txt", "# readme")
    _write(root / ".hidden.txt", "secret")
    _write(root / ".mine" / "name.txt", "tobi")
    _write(root / "pets" / "index.html", "tobi\nloki\njane")
    _write(root / "docs" / "default.htm", "docs")
    (root / "docs" / "index.html").mkdir(parents=True)
    (root / "empty-dir").mkdir()
    (root / "ext-dir.html").mkdir()
    return root


@pytest.fixture()
def options(fixtures: Path) -> SendOptions:
    return SendOptions.from_raw({"root": str(fixtures)})


@pytest.fixture()
def etag_of():
    """Return a helper computing the weak ETag of a fixture file of ``size`` bytes."""

    def _etag(size: int, mtime_ns: int = FIXED_MTIME_NS) -> str:
        return f'W/"{size:x}-{mtime_ns // 1_000_000:x}"'

    return _etag


@pytest.fixture()
def last_modified() -> str:
    return FIXED_LAST_MODIFIED
