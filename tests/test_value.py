"""
Tests for the generic Value node and JSONPath navigation.
"""

from dataclasses import dataclass

import pytest

from cadence.assertions import AssertionType


@dataclass
class Item:
    id: int
    name: str


class TestTypedAccessors:

    @pytest.mark.parametrize("value,accessor", [
        ({"a": 1}, "object"),
        ([1, 2], "array"),
        ("text", "string"),
        (1.5, "number"),
        (True, "boolean"),
    ])
    def test_matching_type(self, expect, handler, value, accessor):
        node = getattr(expect.value(value), accessor)()
        assert handler.failures == []
        assert node.raw == value

    @pytest.mark.parametrize("value,accessor,zero", [
        ("text", "object", {}),
        ({"a": 1}, "array", []),
        (123, "string", ""),
        (True, "number", 0.0),
        (1, "boolean", False),
        (None, "object", {}),
    ])
    def test_type_mismatch(self, expect, handler, value, accessor, zero):
        node = getattr(expect.value(value), accessor)()
        assert handler.last_failure.type == AssertionType.TYPE
        assert node.raw == zero
        assert node.chain.failed

    def test_type_checks(self, expect, handler):
        expect.value(None).is_null()
        expect.value({}).is_object().not_null()
        expect.value([]).is_array()
        expect.value("").is_string()
        expect.value(0).is_number()
        expect.value(False).is_boolean()
        assert handler.failures == []

        expect.value(False).is_number()
        assert handler.last_failure.type == AssertionType.TYPE
        assert handler.last_failure.errors[1] == "actual type: boolean"


class TestEquality:

    def test_record_equals_mapping(self, expect, handler):
        expect.value({"id": 1, "name": "a"}).is_equal(Item(1, "a"))
        assert handler.failures == []

    def test_empty_equals_null(self, expect, handler):
        expect.value([]).is_equal(None)
        expect.value({"items": None}).is_equal({"items": []})
        assert handler.failures == []

    def test_not_equal(self, expect, handler):
        expect.value(1).not_equal(2)
        assert handler.failures == []
        expect.value(1).not_equal(1.0)
        assert handler.last_failure.type == AssertionType.NOT_EQUAL

    def test_in_list(self, expect, handler):
        expect.value("b").in_list("a", "b")
        expect.value(3).not_in_list(1, 2)
        assert handler.failures == []

        expect.value(3).in_list(1, 2)
        assert handler.last_failure.type == AssertionType.IN_LIST

    def test_empty_in_list_is_usage_error(self, expect, handler):
        expect.value(1).in_list()
        assert handler.last_failure.type == AssertionType.USAGE

    def test_unsupported_argument_is_usage_error(self, expect, handler):
        expect.value(1).is_equal({1, 2})
        assert handler.last_failure.type == AssertionType.USAGE


class TestPath:

    DATA = {"users": [{"name": "alice", "age": 30}, {"name": "bob", "age": 25}]}

    def test_single_match(self, expect, handler):
        expect.value(self.DATA).path("$.users[0].name").string().is_equal("alice")
        assert handler.failures == []

    def test_multiple_matches_become_array(self, expect, handler):
        names = expect.value(self.DATA).path("$.users[*].name").array()
        names.is_equal(["alice", "bob"])
        assert handler.failures == []

    def test_no_match(self, expect, handler):
        node = expect.value(self.DATA).path("$.missing")
        assert handler.last_failure.type == AssertionType.MATCH_PATH
        assert node.chain.failed

    def test_invalid_expression(self, expect, handler):
        expect.value(self.DATA).path("$[")
        assert handler.last_failure.type == AssertionType.USAGE

    def test_object_path(self, expect, handler):
        expect.object(self.DATA).path("$.users[1].age").number().is_equal(25)
        assert handler.failures == []
