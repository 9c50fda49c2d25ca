"""
Number node.
"""

from __future__ import annotations

import math
import numbers
from typing import Any

from ..assertions.models import AssertionType
from .base import Node


class Number(Node):
    """
    Assertions on a numeric value.

    Values are stored as float, so 3 and 3.0 are the same number.

    Example:
        n = e.number(4.5)
        n.gt(4).lt(5).in_delta(4.4, 0.2)
    """

    @property
    def raw(self) -> float:
        return self._value

    def is_equal(self, value: Any) -> Number:
        with self._chain.scope("is_equal", value) as chain:
            if not chain.failed:
                self._check_equal(value)
        return self

    def not_equal(self, value: Any) -> Number:
        with self._chain.scope("not_equal", value) as chain:
            if not chain.failed:
                self._check_equal(value, negate=True)
        return self

    def in_list(self, *values: Any) -> Number:
        with self._chain.scope("in_list", *values) as chain:
            if not chain.failed:
                self._check_in_list(values)
        return self

    def in_delta(self, value: float, delta: float) -> Number:
        """Assert |raw - value| <= delta."""
        with self._chain.scope("in_delta", value, delta) as chain:
            if not chain.failed and self._require_numbers(value, delta):
                chain.check(
                    abs(self._value - float(value)) <= float(delta),
                    AssertionType.EQUAL,
                    "expected: numbers lie within delta",
                    actual=self._value,
                    expected=float(value),
                    delta=float(delta),
                )
        return self

    def not_in_delta(self, value: float, delta: float) -> Number:
        with self._chain.scope("not_in_delta", value, delta) as chain:
            if not chain.failed and self._require_numbers(value, delta):
                chain.check(
                    abs(self._value - float(value)) > float(delta),
                    AssertionType.NOT_EQUAL,
                    "expected: numbers do not lie within delta",
                    actual=self._value,
                    expected=float(value),
                    delta=float(delta),
                )
        return self

    def in_range(self, min: float, max: float) -> Number:
        """Assert min <= raw <= max."""
        with self._chain.scope("in_range", min, max) as chain:
            if not chain.failed and self._require_numbers(min, max):
                chain.check(
                    float(min) <= self._value <= float(max),
                    AssertionType.IN_RANGE,
                    "expected: number is within given range",
                    actual=self._value,
                    expected=[float(min), float(max)],
                )
        return self

    def not_in_range(self, min: float, max: float) -> Number:
        with self._chain.scope("not_in_range", min, max) as chain:
            if not chain.failed and self._require_numbers(min, max):
                chain.check(
                    not float(min) <= self._value <= float(max),
                    AssertionType.NOT_IN_RANGE,
                    "expected: number is not within given range",
                    actual=self._value,
                    expected=[float(min), float(max)],
                )
        return self

    def gt(self, value: float) -> Number:
        return self._compare("gt", value, AssertionType.GT, lambda a, b: a > b)

    def ge(self, value: float) -> Number:
        return self._compare("ge", value, AssertionType.GE, lambda a, b: a >= b)

    def lt(self, value: float) -> Number:
        return self._compare("lt", value, AssertionType.LT, lambda a, b: a < b)

    def le(self, value: float) -> Number:
        return self._compare("le", value, AssertionType.LE, lambda a, b: a <= b)

    def is_int(self) -> Number:
        """Assert the number has no fractional part."""
        with self._chain.scope("is_int") as chain:
            if not chain.failed:
                chain.check(
                    math.isfinite(self._value) and float(self._value).is_integer(),
                    AssertionType.VALID,
                    "expected: number is an integer",
                    actual=self._value,
                )
        return self

    def is_finite(self) -> Number:
        with self._chain.scope("is_finite") as chain:
            if not chain.failed:
                chain.check(
                    math.isfinite(self._value),
                    AssertionType.VALID,
                    "expected: number is finite",
                    actual=self._value,
                )
        return self

    def _compare(self, name, value, type, predicate) -> Number:
        with self._chain.scope(name, value) as chain:
            if not chain.failed and self._require_numbers(value):
                chain.check(
                    predicate(self._value, float(value)),
                    type,
                    f"expected: number is {type.value} reference",
                    actual=self._value,
                    reference=float(value),
                )
        return self

    def _require_numbers(self, *values: Any) -> bool:
        for value in values:
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                self._chain.fail(
                    AssertionType.USAGE,
                    f"unexpected argument of type {type(value).__name__}, expected number",
                    actual=repr(value),
                )
                return False
        return True
