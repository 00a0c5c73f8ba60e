from __future__ import annotations


class LsdbError(Exception):
    """Base error for the project."""


class ValidationError(LsdbError):
    """Raised (or returned by ``Lsdb.collection``) when collection names are invalid."""


class CollectionNotFoundError(LsdbError):
    """Raised when operating on a collection that was never declared."""

    def __init__(self, name: str):
        super().__init__(f"Collection not found: {name}")
        self.name = name


class InvalidQueryError(LsdbError):
    """Raised when a query or clause has an unsupported shape or operator."""


class StorageWriteError(LsdbError):
    """Raised when the storage backend rejects a write."""


class CorruptSnapshotError(LsdbError):
    """Raised when the stored database value is not a readable snapshot."""
