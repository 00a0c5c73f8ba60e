from __future__ import annotations

from pathlib import Path

from lsdb.json_store import atomic_write_text, read_text

from .interfaces import KeyValueStorage
from .paths import ensure_dir, key_path


class DiskStorage(KeyValueStorage):
    """
    Stores each key as one file under a directory.

    - Missing files read as absent keys.
    - Writes atomically; OS errors propagate to the caller.
    """

    def __init__(self, directory: Path):
        self._dir = ensure_dir(Path(directory))

    @property
    def directory(self) -> Path:
        return self._dir

    def get(self, key: str) -> str | None:
        return read_text(key_path(self._dir, key))

    def set(self, key: str, value: str) -> None:
        atomic_write_text(key_path(self._dir, key), value)

    def remove(self, key: str) -> None:
        key_path(self._dir, key).unlink(missing_ok=True)
