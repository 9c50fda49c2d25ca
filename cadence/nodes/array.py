"""
Array (sequence) node.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..assertions.models import AssertionType
from ..canonical import contains, equal
from .base import Node

if TYPE_CHECKING:
    from .number import Number
    from .value import Value


class Array(Node):
    """
    Assertions on a JSON array.

    Example:
        arr = e.array(["foo", 123])
        arr.length().is_equal(2)
        arr.element(0).string().is_equal("foo")
        arr.contains_all(123, "foo").not_contains_any("bar")
    """

    @property
    def raw(self) -> list[Any]:
        return self._value

    # ─────────────────────────────────────────────────────────────────────
    # Navigation
    # ─────────────────────────────────────────────────────────────────────

    def length(self) -> Number:
        from .number import Number

        with self._chain.scope("length") as chain:
            return Number(chain.spawn(), float(len(self._value)))

    def element(self, index: int) -> Value:
        """Value node for an element. An out-of-range index is a failure."""
        from .value import Value

        with self._chain.scope("element", index) as chain:
            if chain.failed or not self._require_index(index):
                return Value(chain.spawn(), None)
            if not 0 <= index < len(self._value):
                chain.fail(
                    AssertionType.IN_RANGE,
                    "expected: valid element index",
                    actual=index,
                    expected=[0, len(self._value) - 1],
                )
                return Value(chain.spawn(), None)
            return Value(chain.spawn(), self._value[index])

    def first(self) -> Value:
        from .value import Value

        with self._chain.scope("first") as chain:
            if not chain.failed and not self._value:
                chain.fail(AssertionType.NOT_EMPTY, "expected: array is non-empty", actual=self._value)
            return Value(chain.spawn(), self._value[0] if self._value else None)

    def last(self) -> Value:
        from .value import Value

        with self._chain.scope("last") as chain:
            if not chain.failed and not self._value:
                chain.fail(AssertionType.NOT_EMPTY, "expected: array is non-empty", actual=self._value)
            return Value(chain.spawn(), self._value[-1] if self._value else None)

    def iter(self) -> list[Value]:
        """Value node per element, each with its own chain."""
        from .value import Value

        with self._chain.scope("iter") as chain:
            return [Value(chain.spawn(), item) for item in self._value]

    # ─────────────────────────────────────────────────────────────────────
    # Assertions
    # ─────────────────────────────────────────────────────────────────────

    def is_empty(self) -> Array:
        with self._chain.scope("is_empty") as chain:
            if not chain.failed:
                chain.check(
                    not self._value,
                    AssertionType.EMPTY,
                    "expected: array is empty",
                    actual=self._value,
                )
        return self

    def not_empty(self) -> Array:
        with self._chain.scope("not_empty") as chain:
            if not chain.failed:
                chain.check(
                    bool(self._value),
                    AssertionType.NOT_EMPTY,
                    "expected: array is non-empty",
                    actual=self._value,
                )
        return self

    def is_equal(self, value: Any) -> Array:
        """Ordered, canonical equality."""
        with self._chain.scope("is_equal", value) as chain:
            if not chain.failed:
                self._check_equal(value)
        return self

    def not_equal(self, value: Any) -> Array:
        with self._chain.scope("not_equal", value) as chain:
            if not chain.failed:
                self._check_equal(value, negate=True)
        return self

    def is_equal_unordered(self, value: Any) -> Array:
        """Same elements with the same multiplicity, in any order."""
        with self._chain.scope("is_equal_unordered", value) as chain:
            if chain.failed:
                return self
            arg, ok = self._normalized_arg(value)
            if ok:
                chain.check(
                    _same_multiset(self._value, arg),
                    AssertionType.EQUAL,
                    "expected: arrays are equal (ignoring order)",
                    actual=self._value,
                    expected=arg,
                )
        return self

    def in_list(self, *values: Any) -> Array:
        with self._chain.scope("in_list", *values) as chain:
            if not chain.failed:
                self._check_in_list(values)
        return self

    def contains_all(self, *values: Any) -> Array:
        """Assert every given value is an element of the array."""
        with self._chain.scope("contains_all", *values) as chain:
            if chain.failed:
                return self
            arg, ok = self._normalized_arg(list(values))
            if ok:
                missing = [v for v in arg if not contains(self._value, v)]
                chain.check(
                    not missing,
                    AssertionType.CONTAINS_ELEMENT,
                    "expected: array contains all given elements",
                    actual=self._value,
                    expected=arg,
                    reference=missing,
                )
        return self

    def not_contains_all(self, *values: Any) -> Array:
        """Assert at least one of the given values is missing from the array."""
        with self._chain.scope("not_contains_all", *values) as chain:
            if chain.failed:
                return self
            arg, ok = self._normalized_arg(list(values))
            if ok:
                chain.check(
                    not all(contains(self._value, v) for v in arg),
                    AssertionType.NOT_CONTAINS_ELEMENT,
                    "expected: array does not contain at least one of given elements",
                    actual=self._value,
                    expected=arg,
                )
        return self

    def contains_any(self, *values: Any) -> Array:
        with self._chain.scope("contains_any", *values) as chain:
            if chain.failed:
                return self
            arg, ok = self._normalized_arg(list(values))
            if ok:
                chain.check(
                    any(contains(self._value, v) for v in arg),
                    AssertionType.CONTAINS_ELEMENT,
                    "expected: array contains at least one of given elements",
                    actual=self._value,
                    expected=arg,
                )
        return self

    def not_contains_any(self, *values: Any) -> Array:
        with self._chain.scope("not_contains_any", *values) as chain:
            if chain.failed:
                return self
            arg, ok = self._normalized_arg(list(values))
            if ok:
                found = [v for v in arg if contains(self._value, v)]
                chain.check(
                    not found,
                    AssertionType.NOT_CONTAINS_ELEMENT,
                    "expected: array does not contain any of given elements",
                    actual=self._value,
                    expected=arg,
                    reference=found,
                )
        return self

    def contains_only(self, *values: Any) -> Array:
        """Assert the array holds exactly these elements, in any order."""
        with self._chain.scope("contains_only", *values) as chain:
            if chain.failed:
                return self
            arg, ok = self._normalized_arg(list(values))
            if ok:
                chain.check(
                    _same_multiset(self._value, arg),
                    AssertionType.CONTAINS_ELEMENT,
                    "expected: array contains only given elements",
                    actual=self._value,
                    expected=arg,
                )
        return self

    def has_value(self, index: int, value: Any) -> Array:
        """Assert the element at `index` equals `value`."""
        return self._has_value("has_value", index, value, negate=False)

    def not_has_value(self, index: int, value: Any) -> Array:
        return self._has_value("not_has_value", index, value, negate=True)

    def _has_value(self, name: str, index: int, value: Any, negate: bool) -> Array:
        with self._chain.scope(name, index, value) as chain:
            if chain.failed or not self._require_index(index):
                return self
            if not 0 <= index < len(self._value):
                chain.fail(
                    AssertionType.IN_RANGE,
                    "expected: valid element index",
                    actual=index,
                    expected=[0, len(self._value) - 1],
                )
                return self
            arg, ok = self._normalized_arg(value)
            if not ok:
                return self
            same = equal(self._value[index], arg)
            if negate:
                chain.check(
                    not same,
                    AssertionType.NOT_EQUAL,
                    f"expected: element {index} is non-equal to given value",
                    actual=self._value[index],
                    expected=arg,
                )
            else:
                chain.check(
                    same,
                    AssertionType.EQUAL,
                    f"expected: element {index} is equal to given value",
                    actual=self._value[index],
                    expected=arg,
                )
        return self


def _same_multiset(actual: list[Any], expected: Any) -> bool:
    if not isinstance(expected, list):
        # null is the canonical empty array
        return expected is None and not actual
    if len(actual) != len(expected):
        return False
    remaining = list(expected)
    for item in actual:
        for i, candidate in enumerate(remaining):
            if equal(item, candidate):
                del remaining[i]
                break
        else:
            return False
    return True
