"""
Tests for canonical value normalization and equality.
"""

from collections import namedtuple
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, IntEnum
from fractions import Fraction

import pytest

from cadence.canonical import (
    CanonicalizationError,
    canonicalize,
    contains,
    equal,
    is_subset,
    normalize,
)


@dataclass
class User:
    id: int
    name: str
    tags: list


Point = namedtuple("Point", ["x", "y"])


class Color(Enum):
    RED = "red"


class Level(IntEnum):
    HIGH = 3


class UserID(str):
    pass


class Payload:
    def to_dict(self):
        return {"kind": "payload", "size": 2}


class TestNormalize:
    """normalize() keeps structure and empty containers."""

    def test_scalars(self):
        assert normalize(None) is None
        assert normalize(True) is True
        assert normalize("x") == "x"
        assert normalize(3) == 3.0
        assert isinstance(normalize(3), float)

    def test_numeric_types_become_float(self):
        assert normalize(Decimal("1.5")) == 1.5
        assert normalize(Fraction(1, 4)) == 0.25
        assert normalize(Level.HIGH) == 3.0

    def test_bool_is_not_a_number(self):
        assert normalize(True) is True
        assert normalize(False) is False

    def test_records(self):
        assert normalize(User(1, "alice", [])) == {"id": 1.0, "name": "alice", "tags": []}
        assert normalize(Point(1, 2)) == {"x": 1.0, "y": 2.0}
        assert normalize(Payload()) == {"kind": "payload", "size": 2.0}

    def test_aliases(self):
        value = normalize(UserID("u1"))
        assert value == "u1"
        assert type(value) is str
        assert normalize(Color.RED) == "red"

    def test_sequences(self):
        assert normalize((1, "a")) == [1.0, "a"]
        assert normalize([]) == []

    def test_bytes_become_base64(self):
        assert normalize(b"hi") == "aGk="

    def test_mapping_keys_rendered_like_json(self):
        assert normalize({1: "a", None: "c", 1.5: "d"}) == {
            "1": "a",
            "null": "c",
            "1.5": "d",
        }
        assert normalize({False: "b"}) == {"false": "b"}

    def test_empty_containers_are_kept(self):
        assert normalize({"a": [], "b": {}}) == {"a": [], "b": {}}

    @pytest.mark.parametrize("value", [
        {1, 2},
        complex(1, 2),
        float("nan"),
        float("inf"),
        10 ** 400,
        object(),
    ])
    def test_unsupported_values(self, value):
        with pytest.raises(CanonicalizationError):
            normalize(value)

    def test_unsupported_nested_value(self):
        with pytest.raises(CanonicalizationError) as exc_info:
            normalize({"a": [1, {"b": object()}]})
        assert isinstance(exc_info.value, TypeError)

    def test_unsupported_key(self):
        with pytest.raises(CanonicalizationError):
            normalize({(1, 2): "tuple key"})

    def test_self_referencing_value(self):
        items = [1]
        items.append(items)
        with pytest.raises(CanonicalizationError):
            normalize(items)


class TestCanonicalize:
    """canonicalize() collapses empty containers to None."""

    def test_empty_containers_collapse(self):
        assert canonicalize([]) is None
        assert canonicalize({}) is None
        assert canonicalize({"a": [], "b": {"c": {}}}) == {"a": None, "b": {"c": None}}

    @pytest.mark.parametrize("value", [
        None,
        0,
        "text",
        [1, [], {"a": ()}],
        {"user": User(1, "bob", [])},
        Point(1.5, Decimal("2")),
        {"nested": {"empty": {}, "list": [[], [1]]}},
    ])
    def test_idempotent(self, value):
        once = canonicalize(value)
        assert canonicalize(once) == once


class TestEqual:
    """Structural equality of canonical forms."""

    def test_record_equals_mapping(self):
        assert equal(User(1, "alice", ["a"]), {"name": "alice", "tags": ["a"], "id": 1})

    def test_int_equals_float(self):
        assert equal(3, 3.0)
        assert equal(Decimal("2.50"), 2.5)

    def test_empty_sequence_equals_null(self):
        assert equal([], None)
        assert equal({"items": []}, {"items": None})
        assert equal((), [])

    def test_bool_never_equals_number(self):
        assert not equal(True, 1)
        assert not equal(0, False)
        assert not equal([True], [1])

    def test_mapping_order_is_irrelevant(self):
        assert equal({"a": 1, "b": 2}, {"b": 2, "a": 1})

    def test_sequence_order_matters(self):
        assert not equal([1, 2], [2, 1])

    def test_text_does_not_equal_number(self):
        assert not equal("1", 1)

    def test_key_sets_must_match(self):
        assert not equal({"a": 1}, {"a": 1, "b": 2})


class TestContainment:

    def test_contains(self):
        assert contains([1.0, "a", {"x": 1.0}], {"x": 1})
        assert not contains([1.0], "1")

    def test_is_subset(self):
        value = normalize({"id": 1, "user": {"name": "alice", "age": 30}})
        assert is_subset(normalize({"user": {"name": "alice"}}), value)
        assert not is_subset(normalize({"user": {"name": "bob"}}), value)
        assert not is_subset(normalize({"missing": 1}), value)

    def test_empty_nested_mapping_matches_any_mapping(self):
        value = normalize({"a": {"x": 1}, "b": 2, "c": []})
        assert is_subset({"a": {}}, value)
        assert not is_subset({"b": {}}, value)
        assert is_subset({"c": None}, value)
