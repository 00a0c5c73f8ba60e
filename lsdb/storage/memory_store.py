from __future__ import annotations

from .interfaces import KeyValueStorage


class MemoryStorage(KeyValueStorage):
    """
    Process-local storage backed by a dict. Values are stored as strings.
    """

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._store)

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        self._store[key] = str(value)

    def remove(self, key: str) -> None:
        self._store.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._store)

    def clear(self) -> None:
        self._store.clear()
