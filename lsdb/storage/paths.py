from __future__ import annotations

from pathlib import Path
from urllib.parse import quote


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def key_path(directory: Path, key: str) -> Path:
    # Keys are arbitrary strings; escape everything that is not filename-safe.
    return directory / f"{quote(key, safe='') or '_'}.json"
