from __future__ import annotations

from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import InvalidQueryError

Document = dict[str, Any]


class SortSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    field: str
    order: Literal["asc", "desc"] = "asc"


class Query(BaseModel):
    """
    A single read: optional filter, optional sort, optional limit.

      {"where": {"amount": {"$gt": 10}}, "sort": {"field": "amount", "order": "desc"}, "limit": 3}
    """

    model_config = ConfigDict(extra="forbid")

    where: dict[str, Any] | None = None
    sort: SortSpec | None = None
    limit: int | None = Field(default=None, ge=0)

    @classmethod
    def parse(cls, query: "Query | Mapping[str, Any] | None") -> "Query":
        if query is None:
            return cls()
        if isinstance(query, Query):
            return query
        try:
            return cls.model_validate(query)
        except PydanticValidationError as e:
            raise InvalidQueryError(f"Invalid query: {e}") from e


class CollectionRecord(BaseModel):
    keep_sorted: bool = False
    # Field used to order keep-sorted collections; pinned on first use.
    sort_field: str | None = None
    documents: list[Document] = Field(default_factory=list)


class DatabaseSnapshot(BaseModel):
    """
    Mirrors the stored value for one database:
      { "collections": { "<name>": { "keep_sorted": false, "sort_field": null, "documents": [...] } } }
    """

    model_config = ConfigDict(extra="forbid")

    collections: dict[str, CollectionRecord] = Field(default_factory=dict)

    @staticmethod
    def is_legacy_doc(doc: Mapping[str, Any]) -> bool:
        # Legacy layout: { "<name>": [documents...] }, which may include a
        # collection literally named "collections".
        return all(isinstance(v, list) for v in doc.values())

    @classmethod
    def from_storage_doc(cls, doc: Mapping[str, Any]) -> "DatabaseSnapshot":
        if cls.is_legacy_doc(doc):
            return cls.model_validate(
                {"collections": {name: {"documents": docs} for name, docs in doc.items()}}
            )
        return cls.model_validate(doc)

    def to_storage_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
