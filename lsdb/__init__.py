from __future__ import annotations

from .database import Lsdb, open_database
from .errors import (
    CollectionNotFoundError,
    CorruptSnapshotError,
    InvalidQueryError,
    LsdbError,
    StorageWriteError,
    ValidationError,
)
from .models import Query, SortSpec
from .storage import DiskStorage, KeyValueStorage, MemoryStorage

__all__ = [
    "Lsdb",
    "open_database",
    "Query",
    "SortSpec",
    "KeyValueStorage",
    "MemoryStorage",
    "DiskStorage",
    "LsdbError",
    "ValidationError",
    "CollectionNotFoundError",
    "InvalidQueryError",
    "StorageWriteError",
    "CorruptSnapshotError",
]
