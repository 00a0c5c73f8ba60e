from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence, Union

from dotenv import load_dotenv

from . import query as query_engine
from .collection_store import CollectionStore
from .errors import ValidationError
from .models import Document, Query
from .settings import Settings, get_settings
from .storage import DiskStorage, KeyValueStorage, MemoryStorage

logger = logging.getLogger(__name__)

QueryLike = Union[Query, Mapping[str, Any], None]


class Lsdb:
    """
    A named database of document collections persisted in a key-value backend.

    All state lives in ``storage`` under one key derived from ``name``; each call
    reads it, works on the result, and writes it back when something changed.
    """

    def __init__(self, name: str, storage: KeyValueStorage, settings: Settings | None = None):
        if not isinstance(name, str) or not name:
            raise ValueError("database name must be a non-empty string")
        self._settings = settings or get_settings()
        self.name = name
        self._store = CollectionStore(
            storage,
            f"{self._settings.key_prefix}{name}",
            json_indent=self._settings.json_indent,
        )

    @property
    def storage_key(self) -> str:
        return self._store.storage_key

    def collection(
        self,
        names: str | Sequence[str],
        keep_sorted: bool = False,
        sort_field: str | None = None,
    ) -> dict[str, str] | ValidationError:
        """
        Declare one or more collections. Anything other than a list or tuple
        is taken as a single name.

        Returns ``{"status": "success"}``; invalid names are reported by
        returning (not raising) a ``ValidationError``.
        """
        if not isinstance(names, (list, tuple)):
            names = [names]
        try:
            self._store.declare(names, keep_sorted=keep_sorted, sort_field=sort_field)
        except ValidationError as e:
            logger.info("LSDB DECLARE: rejected %r: %s", names, e)
            return e
        return {"status": "success"}

    def collections(self) -> list[str]:
        return list(self._store.load_snapshot().collections)

    def insert(self, name: str, document: Mapping[str, Any]) -> Document:
        return self._store.insert_many(name, [document])[0]

    def insert_many(self, name: str, documents: Sequence[Mapping[str, Any]]) -> list[Document]:
        return self._store.insert_many(name, documents)

    def find(self, name: str, query: QueryLike = None) -> list[Document]:
        q = Query.parse(query)
        if self._settings.debug_log_queries:
            logger.debug("LSDB FIND: %s/%s %s", self.storage_key, name, q.model_dump(exclude_none=True))
        return query_engine.run(self._store.load(name), q)

    def find_one(self, name: str, query: QueryLike = None) -> Document | None:
        q = Query.parse(query)
        if self._settings.debug_log_queries:
            logger.debug("LSDB FIND ONE: %s/%s %s", self.storage_key, name, q.model_dump(exclude_none=True))
        return query_engine.find_one(self._store.load(name), q)

    def update(self, name: str, match: Mapping[str, Any], patch: Mapping[str, Any]) -> Document | None:
        return self._store.update(name, match, patch)

    def delete(self, name: str, query: QueryLike = None) -> int:
        return self._store.delete(name, Query.parse(query))

    def all(self, name: str | None = None) -> list[Document] | dict[str, list[Document]]:
        snapshot = self._store.load_snapshot()
        if name is None:
            return {n: rec.documents for n, rec in snapshot.collections.items()}
        return CollectionStore.record(snapshot, name).documents

    def count(self, name: str) -> int:
        return len(self._store.load(name))

    def clear(self) -> None:
        """Remove this database's value from storage; every collection is forgotten."""
        self._store.drop_all()
        logger.info("LSDB CLEAR: %s", self.storage_key)


def open_database(name: str, settings: Settings | None = None, *, env_file: str = "local.env") -> Lsdb:
    """
    Build an ``Lsdb`` from environment configuration.

    ``env_file`` is loaded first (missing files are ignored), so ``LSDB_*``
    variables can live there.
    """
    if settings is None:
        load_dotenv(env_file)
        settings = get_settings()

    if settings.storage == "disk":
        storage: KeyValueStorage = DiskStorage(settings.data_dir)
    elif settings.storage == "memory":
        storage = MemoryStorage()
    else:
        raise ValueError(f"LSDB_STORAGE must be 'memory' or 'disk', got {settings.storage!r}")
    return Lsdb(name, storage, settings)
