"""Local storage locations for HTTP response caches."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "chainseed"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


def _default_cache_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_CACHE_HOME")
        base_path = Path(base) if base else (Path.home() / ".cache")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_http_cache_path(*, ensure: bool = True) -> Path:
    """Return the sqlite cache path, honouring ``CHAINSEED_CACHE_DIR``."""

    env_dir = os.getenv("CHAINSEED_CACHE_DIR")
    cache_dir = Path(env_dir).expanduser().resolve() if env_dir else _default_cache_dir()
    if ensure:
        cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir / HTTP_CACHE_FILENAME
