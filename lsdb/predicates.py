from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Mapping

from .errors import InvalidQueryError

_MISSING = object()


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strict_equal(a: Any, b: Any) -> bool:
    """
    Equality without Python's bool/int coercion (True != 1).

    Lists and mappings compare element by element.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a is b
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(strict_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(strict_equal(a[k], b[k]) for k in a)
    if is_number(a) and is_number(b):
        return a == b
    if type(a) is not type(b):
        return False
    return a == b


def _comparable(a: Any, b: Any) -> bool:
    return (is_number(a) and is_number(b)) or (isinstance(a, str) and isinstance(b, str))


def _in(value: Any, candidates: list[Any]) -> bool:
    if isinstance(value, list):
        return any(strict_equal(v, c) for v in value for c in candidates)
    return any(strict_equal(value, c) for c in candidates)


class Operator(str, Enum):
    EQ = "$eq"
    NE = "$ne"
    GT = "$gt"
    GTE = "$gte"
    LT = "$lt"
    LTE = "$lte"
    IN = "$in"
    NIN = "$nin"

    @classmethod
    def parse(cls, key: Any) -> "Operator":
        try:
            return cls(key)
        except ValueError:
            raise InvalidQueryError(f"Unsupported operator: {key!r}") from None


# Each function receives the field value (or _MISSING) and the comparand.
_EVALUATORS: dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.EQ: lambda v, a: v is not _MISSING and strict_equal(v, a),
    Operator.NE: lambda v, a: v is _MISSING or not strict_equal(v, a),
    Operator.GT: lambda v, a: _comparable(v, a) and v > a,
    Operator.GTE: lambda v, a: _comparable(v, a) and v >= a,
    Operator.LT: lambda v, a: _comparable(v, a) and v < a,
    Operator.LTE: lambda v, a: _comparable(v, a) and v <= a,
    Operator.IN: lambda v, a: v is not _MISSING and _in(v, a),
    Operator.NIN: lambda v, a: v is _MISSING or not _in(v, a),
}


def parse_clause(field_path: str, clause: Any) -> list[tuple[Operator, Any]]:
    """
    Validate a field clause and return its (operator, comparand) pairs.

    A non-mapping clause is shorthand for ``{"$eq": clause}``.
    """
    if not isinstance(clause, Mapping):
        return [(Operator.EQ, clause)]
    if not clause:
        raise InvalidQueryError(f"Empty clause for field {field_path!r}")

    parsed = []
    for key, arg in clause.items():
        op = Operator.parse(key)
        if op in (Operator.IN, Operator.NIN) and not isinstance(arg, list):
            raise InvalidQueryError(f"{op.value} requires a list, got {type(arg).__name__}")
        parsed.append((op, arg))
    return parsed


def matches(document: Mapping[str, Any], field_path: str, clause: Any) -> bool:
    """
    Evaluate one field clause against a document.

    ``clause`` maps operators to comparands, e.g. ``{"$gt": 20}``; several
    operators in one clause must all hold. A field absent from the document
    satisfies only ``$ne`` and ``$nin``.
    """
    ops = parse_clause(field_path, clause)
    value = document.get(field_path, _MISSING)
    return all(_EVALUATORS[op](value, arg) for op, arg in ops)


def matches_where(document: Mapping[str, Any], where: Mapping[str, Any] | None) -> bool:
    if not where:
        return True
    return all(matches(document, field, clause) for field, clause in where.items())
