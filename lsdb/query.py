from __future__ import annotations

import json
from typing import Any, Iterable, Mapping

from .models import Document, Query, SortSpec
from .predicates import is_number, matches_where, parse_clause

_MISSING = object()


def sort_key(value: Any) -> tuple[int, Any]:
    """
    Total ordering over stored values so mixed-type fields never raise:

      missing < None < bool < number < string < list/mapping
    """
    if value is _MISSING:
        return (-1, 0)
    if value is None:
        return (0, 0)
    if isinstance(value, bool):
        return (1, int(value))
    if is_number(value):
        return (2, value)
    if isinstance(value, str):
        return (3, value)
    return (4, json.dumps(value, sort_keys=True))


def sort_documents(docs: list[Document], spec: SortSpec) -> list[Document]:
    # sorted() is stable, and reverse=True keeps ties in their original order.
    return sorted(
        docs,
        key=lambda d: sort_key(d.get(spec.field, _MISSING)),
        reverse=spec.order == "desc",
    )


def validate_where(where: Mapping[str, Any] | None) -> None:
    for field, clause in (where or {}).items():
        parse_clause(field, clause)


def run(documents: Iterable[Document], query: Query | Mapping[str, Any] | None) -> list[Document]:
    """
    Filter, then sort, then truncate. Relative order is preserved by every step
    except an explicit sort.
    """
    q = Query.parse(query)
    validate_where(q.where)

    results = [d for d in documents if matches_where(d, q.where)]
    if q.sort is not None:
        results = sort_documents(results, q.sort)
    if q.limit is not None:
        results = results[: q.limit]
    return results


def find_one(documents: Iterable[Document], query: Query | Mapping[str, Any] | None) -> Document | None:
    q = Query.parse(query)
    results = run(documents, q.model_copy(update={"limit": 1}))
    return results[0] if results else None
