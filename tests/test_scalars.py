"""
Tests for the String, Number and Boolean nodes.
"""

import pytest

from cadence.assertions import AssertionType


class TestString:

    def test_equality(self, expect, handler):
        expect.string("Hello").is_equal("Hello").not_equal("hello").is_equal_fold("HELLO")
        assert handler.failures == []

    def test_non_string_argument_is_usage_error(self, expect, handler):
        expect.string("1").is_equal(1)
        assert handler.last_failure.type == AssertionType.USAGE

    def test_empty(self, expect, handler):
        expect.string("").is_empty()
        expect.string("x").not_empty()
        assert handler.failures == []

    def test_length(self, expect, handler):
        expect.string("Hello, World").length().is_equal(12)
        assert handler.failures == []

    def test_contains(self, expect, handler):
        s = expect.string("Hello, World")
        s.contains("World").not_contains("world").contains_fold("WORLD")
        s.has_prefix("Hello").has_suffix("World")
        assert handler.failures == []

        expect.string("abc").has_prefix("b")
        assert handler.last_failure.type == AssertionType.CONTAINS_SUBSET

    def test_matches(self, expect, handler):
        expect.string("user-42").matches(r"\d+$").not_matches(r"^\d")
        assert handler.failures == []

        expect.string("user").matches(r"\d")
        assert handler.last_failure.type == AssertionType.MATCH_REGEXP

    def test_invalid_regexp_is_usage_error(self, expect, handler):
        expect.string("x").matches("(")
        assert handler.last_failure.type == AssertionType.USAGE

    def test_in_list(self, expect, handler):
        expect.string("b").in_list("a", "b")
        assert handler.failures == []

    def test_is_ascii(self, expect, handler):
        expect.string("plain").is_ascii()
        assert handler.failures == []
        expect.string("blåbær").is_ascii()
        assert handler.last_failure.type == AssertionType.VALID

    def test_as_number(self, expect, handler):
        expect.string("4.5").as_number().in_range(4, 5)
        assert handler.failures == []

        node = expect.string("four").as_number()
        assert handler.last_failure.type == AssertionType.VALID
        assert node.raw == 0.0

    @pytest.mark.parametrize("text", ["nan", "inf", "-Infinity"])
    def test_as_number_rejects_non_finite(self, expect, handler, text):
        node = expect.string(text).as_number()
        assert handler.last_failure.type == AssertionType.VALID
        assert node.raw == 0.0
        assert node.chain.failed

    @pytest.mark.parametrize("text,value", [("true", True), ("YES", True), ("0", False), ("off", False)])
    def test_as_boolean(self, expect, handler, text, value):
        assert expect.string(text).as_boolean().raw is value
        assert handler.failures == []

    def test_as_boolean_invalid(self, expect, handler):
        expect.string("maybe").as_boolean()
        assert handler.last_failure.type == AssertionType.VALID


class TestNumber:

    def test_equality_across_numeric_types(self, expect, handler):
        expect.number(3).is_equal(3.0).not_equal(4).in_list(1, 3)
        assert handler.failures == []

    def test_comparisons(self, expect, handler):
        expect.number(4.5).gt(4).ge(4.5).lt(5).le(4.5)
        assert handler.failures == []

        expect.number(4.5).gt(5)
        result = handler.last_failure
        assert result.type == AssertionType.GT
        assert result.reference.value == 5.0

    def test_delta(self, expect, handler):
        expect.number(4.5).in_delta(4.4, 0.2).not_in_delta(4.0, 0.1)
        assert handler.failures == []

        expect.number(4.5).in_delta(4.0, 0.1)
        assert handler.last_failure.delta.value == 0.1

    def test_range(self, expect, handler):
        expect.number(5).in_range(1, 10).not_in_range(6, 10)
        assert handler.failures == []

        expect.number(5).in_range(6, 10)
        result = handler.last_failure
        assert result.type == AssertionType.IN_RANGE
        assert result.expected.value == [6.0, 10.0]

    def test_bool_argument_is_usage_error(self, expect, handler):
        expect.number(1).gt(True)
        assert handler.last_failure.type == AssertionType.USAGE

    def test_is_int(self, expect, handler):
        expect.number(3.0).is_int().is_finite()
        assert handler.failures == []

        expect.number(3.5).is_int()
        assert handler.last_failure.type == AssertionType.VALID

    def test_bool_is_not_a_number(self, expect, handler):
        expect.number(True)
        assert handler.last_failure.type == AssertionType.TYPE


class TestBoolean:

    def test_true_false(self, expect, handler):
        expect.boolean(True).is_true().is_equal(True).not_equal(False).in_list(True)
        expect.boolean(False).is_false()
        assert handler.failures == []

        expect.boolean(False).is_true()
        assert handler.last_failure.type == AssertionType.EQUAL

    def test_number_never_equals_boolean(self, expect, handler):
        expect.boolean(True).is_equal(1)
        assert handler.last_failure.type == AssertionType.EQUAL
