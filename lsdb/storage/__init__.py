from __future__ import annotations

from .disk_store import DiskStorage
from .interfaces import KeyValueStorage
from .memory_store import MemoryStorage

__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "DiskStorage",
]
