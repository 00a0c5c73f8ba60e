from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def dumps(payload: Any, *, indent: int | None = None) -> str:
    """
    Serialize a snapshot to the string stored in the backend.
    """
    separators = None if indent is not None else (",", ":")
    return json.dumps(payload, indent=indent, separators=separators, ensure_ascii=False)


def loads(raw: str | None) -> Any | None:
    """
    Parse a stored value.

    Returns None for absent or blank values; invalid JSON raises ValueError.
    """
    if raw is None or not raw.strip():
        return None
    return json.loads(raw)


def read_text(path: Path) -> str | None:
    """
    Read a text file, returning None when it does not exist.
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None


def atomic_write_text(path: Path, text: str) -> None:
    """
    Atomically write text to disk by writing to a temp file then replacing.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        f.write(text)
    tmp_path.replace(path)
