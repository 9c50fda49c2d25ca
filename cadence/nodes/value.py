"""
Generic value node.

Value wraps anything that came out of a response or was handed to
Expect.value(): a JSON-like tree of None, bool, float, str, list and dict.
Typed accessors (object(), array(), string(), ...) narrow it to a typed
node; a type mismatch is reported as an assertion failure.
"""

from __future__ import annotations

from typing import Any

from jsonpath_ng import parse as parse_jsonpath
from jsonpath_ng.exceptions import JsonPathParserError

from ..assertions.chain import Chain
from ..assertions.models import AssertionType
from .array import Array
from .base import Node
from .boolean import Boolean
from .number import Number
from .object import Object
from .string import String


# Display names for the JSON-like types a node can hold
_TYPE_NAMES: dict[type, str] = {
    type(None): "null",
    bool: "boolean",
    float: "number",
    str: "string",
    list: "array",
    dict: "object",
}


def type_name(value: Any) -> str:
    """JSON type name of a normalized value."""
    return _TYPE_NAMES.get(type(value), type(value).__name__)


class Value(Node):
    """
    Assertions on a value of any type.

    Example:
        v = e.value({"users": [{"name": "alice"}]})
        v.path("$.users[0].name").string().is_equal("alice")
        v.object().value("users").array().length().is_equal(1)
    """

    def path(self, expr: str) -> Value:
        """
        Evaluate a JSONPath expression and return the match as a Value.

        A single match yields that value, several matches yield a list.
        No match at all is a failure.
        """
        return path_value(self._chain, self._value, expr)

    # ─────────────────────────────────────────────────────────────────────
    # Typed accessors
    # ─────────────────────────────────────────────────────────────────────

    def object(self) -> Object:
        with self._chain.scope("object") as chain:
            if not chain.failed:
                self._check_type(dict)
            value = self._value if isinstance(self._value, dict) else {}
            return Object(chain.spawn(), value)

    def array(self) -> Array:
        with self._chain.scope("array") as chain:
            if not chain.failed:
                self._check_type(list)
            value = self._value if isinstance(self._value, list) else []
            return Array(chain.spawn(), value)

    def string(self) -> String:
        with self._chain.scope("string") as chain:
            if not chain.failed:
                self._check_type(str)
            value = self._value if isinstance(self._value, str) else ""
            return String(chain.spawn(), value)

    def number(self) -> Number:
        with self._chain.scope("number") as chain:
            if not chain.failed:
                self._check_type(float)
            value = self._value if isinstance(self._value, float) else 0.0
            return Number(chain.spawn(), value)

    def boolean(self) -> Boolean:
        with self._chain.scope("boolean") as chain:
            if not chain.failed:
                self._check_type(bool)
            value = self._value if isinstance(self._value, bool) else False
            return Boolean(chain.spawn(), value)

    # ─────────────────────────────────────────────────────────────────────
    # Type checks
    # ─────────────────────────────────────────────────────────────────────

    def is_null(self) -> Value:
        with self._chain.scope("is_null") as chain:
            if not chain.failed:
                chain.check(
                    self._value is None,
                    AssertionType.NIL,
                    "expected: value is null",
                    actual=self._value,
                )
        return self

    def not_null(self) -> Value:
        with self._chain.scope("not_null") as chain:
            if not chain.failed:
                chain.check(
                    self._value is not None,
                    AssertionType.NOT_NIL,
                    "expected: value is non-null",
                    actual=self._value,
                )
        return self

    def is_object(self) -> Value:
        return self._type_check("is_object", dict)

    def is_array(self) -> Value:
        return self._type_check("is_array", list)

    def is_string(self) -> Value:
        return self._type_check("is_string", str)

    def is_number(self) -> Value:
        return self._type_check("is_number", float)

    def is_boolean(self) -> Value:
        return self._type_check("is_boolean", bool)

    # ─────────────────────────────────────────────────────────────────────
    # Equality
    # ─────────────────────────────────────────────────────────────────────

    def is_equal(self, value: Any) -> Value:
        """Canonical equality: records, numeric types and aliases are normalized."""
        with self._chain.scope("is_equal", value) as chain:
            if not chain.failed:
                self._check_equal(value)
        return self

    def not_equal(self, value: Any) -> Value:
        with self._chain.scope("not_equal", value) as chain:
            if not chain.failed:
                self._check_equal(value, negate=True)
        return self

    def in_list(self, *values: Any) -> Value:
        with self._chain.scope("in_list", *values) as chain:
            if not chain.failed:
                self._check_in_list(values)
        return self

    def not_in_list(self, *values: Any) -> Value:
        with self._chain.scope("not_in_list", *values) as chain:
            if not chain.failed:
                self._check_in_list(values, negate=True)
        return self

    def _type_check(self, name: str, expected: type) -> Value:
        with self._chain.scope(name) as chain:
            if not chain.failed:
                self._check_type(expected)
        return self

    def _check_type(self, expected: type) -> None:
        self._chain.check(
            type(self._value) is expected,
            AssertionType.TYPE,
            f"expected: value is {_TYPE_NAMES[expected]}",
            f"actual type: {type_name(self._value)}",
            actual=self._value,
        )


def path_value(chain: Chain, data: Any, expr: str) -> Value:
    """Shared implementation of Value.path() and Object.path()."""
    with chain.scope("path", expr):
        if chain.failed:
            return Value(chain.spawn(), None)

        try:
            jsonpath_expr = parse_jsonpath(expr)
        except JsonPathParserError as e:
            chain.fail(
                AssertionType.USAGE,
                f"invalid JSONPath expression: {e}",
                actual=expr,
            )
            return Value(chain.spawn(), None)
        except Exception as e:
            chain.fail(
                AssertionType.USAGE,
                f"failed to parse JSONPath: {type(e).__name__}: {e}",
                actual=expr,
            )
            return Value(chain.spawn(), None)

        try:
            matches = [m.value for m in jsonpath_expr.find(data)]
        except Exception as e:
            chain.fail(
                AssertionType.OPERATION,
                f"failed to evaluate JSONPath: {type(e).__name__}: {e}",
                actual=expr,
            )
            return Value(chain.spawn(), None)

        if not matches:
            chain.fail(
                AssertionType.MATCH_PATH,
                "expected: JSONPath matches at least one value",
                actual=data,
                expected=expr,
            )
            return Value(chain.spawn(), None)

        return Value(chain.spawn(), matches[0] if len(matches) == 1 else matches)
