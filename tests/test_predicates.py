from __future__ import annotations

import pytest

from lsdb.errors import InvalidQueryError
from lsdb.predicates import Operator, matches, matches_where, strict_equal


DOC = {"_id": "a1", "name": "Jane", "amount": 50, "tags": ["Pizza", "Cheese"], "active": True, "item": {"k": 1}}


def test_eq_and_ne():
    assert matches(DOC, "name", {"$eq": "Jane"})
    assert not matches(DOC, "name", {"$eq": "jane"})
    assert matches(DOC, "name", {"$ne": "Bob"})
    assert not matches(DOC, "amount", {"$ne": 50})


def test_eq_is_strict_about_bool_and_numbers():
    assert not matches(DOC, "active", {"$eq": 1})
    assert matches(DOC, "active", {"$eq": True})
    assert matches(DOC, "amount", {"$eq": 50.0})
    assert not matches(DOC, "amount", {"$eq": "50"})


def test_eq_on_nested_document_and_list():
    assert matches(DOC, "item", {"$eq": {"k": 1}})
    assert not matches(DOC, "item", {"$eq": {"k": True}})
    assert matches(DOC, "tags", {"$eq": ["Pizza", "Cheese"]})


def test_comparisons():
    assert matches(DOC, "amount", {"$gt": 20})
    assert matches(DOC, "amount", {"$gte": 50})
    assert matches(DOC, "amount", {"$lt": 100})
    assert matches(DOC, "amount", {"$lte": 50})
    assert not matches(DOC, "amount", {"$lt": 50})
    assert matches(DOC, "name", {"$gt": "Alice"})


def test_comparisons_between_incomparable_types_never_match():
    assert not matches(DOC, "name", {"$gt": 1})
    assert not matches(DOC, "amount", {"$lt": "z"})
    assert not matches(DOC, "active", {"$gte": 0})
    assert not matches(DOC, "tags", {"$gt": 0})


def test_in_with_list_field_shares_an_element():
    assert matches(DOC, "tags", {"$in": ["Pizza"]})
    assert not matches(DOC, "tags", {"$in": ["Ch"]})
    assert not matches(DOC, "tags", {"$nin": ["Cheese", "Bread"]})
    assert matches(DOC, "tags", {"$nin": ["Ch"]})


def test_in_with_scalar_field():
    assert matches(DOC, "name", {"$in": ["Bob", "Jane"]})
    assert not matches(DOC, "name", {"$in": ["an", "Ja"]})
    assert matches(DOC, "amount", {"$nin": [10, 20]})
    assert not matches(DOC, "amount", {"$nin": [50]})


def test_absent_field_only_satisfies_negations():
    for op, arg in [("$eq", 1), ("$gt", 0), ("$gte", 0), ("$lt", 100), ("$lte", 100), ("$in", [None])]:
        assert not matches(DOC, "missing", {op: arg}), op
    assert matches(DOC, "missing", {"$ne": 1})
    assert matches(DOC, "missing", {"$nin": ["anything"]})


def test_multiple_operators_in_one_clause_are_anded():
    assert matches(DOC, "amount", {"$gt": 10, "$lt": 60})
    assert not matches(DOC, "amount", {"$gt": 10, "$lt": 40})


def test_plain_value_is_equality_shorthand():
    assert matches(DOC, "name", "Jane")
    assert not matches(DOC, "name", "Bob")


def test_unknown_operator_is_rejected():
    with pytest.raises(InvalidQueryError, match=r"\$regex"):
        matches(DOC, "name", {"$regex": "J.*"})
    # rejected even when another operator already fails
    with pytest.raises(InvalidQueryError):
        matches(DOC, "amount", {"$gt": 1000, "$bogus": 1})


def test_bad_clause_shapes_are_rejected():
    with pytest.raises(InvalidQueryError):
        matches(DOC, "name", {})
    with pytest.raises(InvalidQueryError, match="requires a list"):
        matches(DOC, "name", {"$in": "Jane"})
    with pytest.raises(InvalidQueryError, match="requires a list"):
        matches(DOC, "missing", {"$nin": "x"})


def test_matches_where_combines_fields_with_and():
    assert matches_where(DOC, None)
    assert matches_where(DOC, {})
    assert matches_where(DOC, {"name": {"$eq": "Jane"}, "amount": {"$gt": 10}})
    assert not matches_where(DOC, {"name": {"$eq": "Jane"}, "amount": {"$gt": 100}})


def test_operator_enum_is_closed():
    assert {op.value for op in Operator} == {"$eq", "$ne", "$gt", "$gte", "$lt", "$lte", "$in", "$nin"}
    with pytest.raises(InvalidQueryError):
        Operator.parse("$exists")


def test_strict_equal():
    assert strict_equal(None, None)
    assert not strict_equal(None, 0)
    assert not strict_equal(0, False)
    assert strict_equal([1, {"a": [True]}], [1, {"a": [True]}])
    assert not strict_equal([1, 2], [1, 2, 3])
