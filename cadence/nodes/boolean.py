"""
Boolean node.
"""

from __future__ import annotations

from typing import Any

from ..assertions.models import AssertionType
from .base import Node


class Boolean(Node):
    """Assertions on a boolean value."""

    @property
    def raw(self) -> bool:
        return self._value

    def is_true(self) -> Boolean:
        with self._chain.scope("is_true") as chain:
            if not chain.failed:
                chain.check(
                    self._value is True,
                    AssertionType.EQUAL,
                    "expected: boolean is true",
                    actual=self._value,
                    expected=True,
                )
        return self

    def is_false(self) -> Boolean:
        with self._chain.scope("is_false") as chain:
            if not chain.failed:
                chain.check(
                    self._value is False,
                    AssertionType.EQUAL,
                    "expected: boolean is false",
                    actual=self._value,
                    expected=False,
                )
        return self

    def is_equal(self, value: Any) -> Boolean:
        with self._chain.scope("is_equal", value) as chain:
            if not chain.failed:
                self._check_equal(value)
        return self

    def not_equal(self, value: Any) -> Boolean:
        with self._chain.scope("not_equal", value) as chain:
            if not chain.failed:
                self._check_equal(value, negate=True)
        return self

    def in_list(self, *values: Any) -> Boolean:
        with self._chain.scope("in_list", *values) as chain:
            if not chain.failed:
                self._check_in_list(values)
        return self
