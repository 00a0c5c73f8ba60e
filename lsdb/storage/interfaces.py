from __future__ import annotations

from typing import Protocol


class KeyValueStorage(Protocol):
    """
    Minimal synchronous storage capability: string keys mapped to string values.
    """

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store the value, replacing any previous one."""
        ...

    def remove(self, key: str) -> None:
        """Delete the key; removing an absent key is a no-op."""
        ...
