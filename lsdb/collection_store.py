from __future__ import annotations

import copy
import logging
from typing import Any, Iterable, Mapping

from pydantic import ValidationError as PydanticValidationError

from . import json_store
from .errors import CollectionNotFoundError, CorruptSnapshotError, StorageWriteError, ValidationError
from .ids import new_id
from .models import CollectionRecord, DatabaseSnapshot, Document, Query, SortSpec
from .predicates import is_number, matches_where, strict_equal
from .query import sort_documents, validate_where
from .storage.interfaces import KeyValueStorage

logger = logging.getLogger(__name__)

ID_FIELD = "_id"


def _default_sort_field(docs: Iterable[Document]) -> str | None:
    for doc in docs:
        for key, value in doc.items():
            if key != ID_FIELD and (is_number(value) or isinstance(value, str)):
                return key
    return None


class CollectionStore:
    """
    Owns the name -> collection mapping of one database, persisted as a single
    JSON value under ``storage_key``.

    Every operation is load snapshot -> transform in memory -> persist snapshot.
    Nothing is cached between calls, so a failed write leaves no trace.
    """

    def __init__(self, storage: KeyValueStorage, storage_key: str, *, json_indent: int | None = None):
        self._storage = storage
        self._key = storage_key
        self._json_indent = json_indent

    @property
    def storage_key(self) -> str:
        return self._key

    # --- snapshot round-trip -------------------------------------------

    def load_snapshot(self) -> DatabaseSnapshot:
        raw = self._storage.get(self._key)
        try:
            doc = json_store.loads(raw)
        except ValueError as e:
            logger.warning("LSDB LOAD: stored value under %r is not valid JSON: %r", self._key, e)
            raise CorruptSnapshotError(f"Stored value under {self._key!r} is not valid JSON") from e

        if doc is None:
            return DatabaseSnapshot()
        if not isinstance(doc, dict):
            raise CorruptSnapshotError(f"Stored value under {self._key!r} is not a JSON object")
        if doc and DatabaseSnapshot.is_legacy_doc(doc):
            logger.warning("LSDB LOAD: migrating legacy layout under %r", self._key)
        try:
            return DatabaseSnapshot.from_storage_doc(doc)
        except PydanticValidationError as e:
            raise CorruptSnapshotError(f"Stored value under {self._key!r} is not a database snapshot") from e

    def persist(self, snapshot: DatabaseSnapshot) -> None:
        payload = json_store.dumps(snapshot.to_storage_doc(), indent=self._json_indent)
        try:
            self._storage.set(self._key, payload)
        except Exception as e:
            logger.error("LSDB PERSIST: failed to write %r: %r", self._key, e)
            raise StorageWriteError(f"Failed to write database {self._key!r}") from e

    def drop_all(self) -> None:
        self._storage.remove(self._key)

    @staticmethod
    def record(snapshot: DatabaseSnapshot, name: str) -> CollectionRecord:
        rec = snapshot.collections.get(name)
        if rec is None:
            raise CollectionNotFoundError(name)
        return rec

    def load(self, name: str) -> list[Document]:
        return self.record(self.load_snapshot(), name).documents

    # --- declaration ---------------------------------------------------

    def declare(self, names: Iterable[Any], keep_sorted: bool = False, sort_field: str | None = None) -> list[str]:
        """
        Create every missing collection. Existing collections keep their
        documents and flags. Returns the names that were newly created.
        """
        names = list(names)
        if not all(isinstance(n, str) for n in names):
            raise ValidationError("All values must be strings")
        if any(not n for n in names):
            raise ValidationError("Collection names must not be empty")

        snapshot = self.load_snapshot()
        created = []
        for name in names:
            if name in snapshot.collections:
                continue
            snapshot.collections[name] = CollectionRecord(keep_sorted=keep_sorted, sort_field=sort_field)
            created.append(name)

        if created:
            self.persist(snapshot)
            logger.info("LSDB DECLARE: %s created=%s keep_sorted=%s", self._key, created, keep_sorted)
        return created

    # --- mutation paths ------------------------------------------------

    def _resort(self, rec: CollectionRecord) -> None:
        if not rec.keep_sorted:
            return
        if rec.sort_field is None:
            rec.sort_field = _default_sort_field(rec.documents)
        rec.documents = sort_documents(rec.documents, SortSpec(field=rec.sort_field or ID_FIELD))

    def insert_many(self, name: str, docs: Iterable[Mapping[str, Any]]) -> list[Document]:
        snapshot = self.load_snapshot()
        rec = self.record(snapshot, name)

        inserted = []
        for doc in docs:
            if not isinstance(doc, Mapping):
                raise TypeError("documents must be mappings")
            stored = copy.deepcopy(dict(doc))
            stored[ID_FIELD] = new_id()
            rec.documents.append(stored)
            inserted.append(stored)

        self._resort(rec)
        self.persist(snapshot)
        logger.debug("LSDB INSERT: %s/%s ids=%s", self._key, name, [d[ID_FIELD] for d in inserted])
        return copy.deepcopy(inserted)

    def update(self, name: str, match: Mapping[str, Any], patch: Mapping[str, Any]) -> Document | None:
        snapshot = self.load_snapshot()
        rec = self.record(snapshot, name)

        target = next(
            (d for d in rec.documents if all(k in d and strict_equal(d[k], v) for k, v in match.items())),
            None,
        )
        if target is None:
            return None

        for key, value in patch.items():
            if key == ID_FIELD:
                continue
            target[key] = copy.deepcopy(value)

        self._resort(rec)
        self.persist(snapshot)
        logger.debug("LSDB UPDATE: %s/%s _id=%s fields=%s", self._key, name, target[ID_FIELD], sorted(patch))
        return copy.deepcopy(target)

    def delete(self, name: str, query: Query) -> int:
        snapshot = self.load_snapshot()
        rec = self.record(snapshot, name)
        validate_where(query.where)

        kept = [d for d in rec.documents if not matches_where(d, query.where)]
        removed = len(rec.documents) - len(kept)
        if not removed:
            return 0

        rec.documents = kept
        self._resort(rec)
        self.persist(snapshot)
        logger.debug("LSDB DELETE: %s/%s removed=%d", self._key, name, removed)
        return removed
