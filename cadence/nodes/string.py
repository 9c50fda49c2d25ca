"""
String node.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING

from ..assertions.models import AssertionType
from .base import Node

if TYPE_CHECKING:
    from .boolean import Boolean
    from .number import Number

_TRUE_STRINGS = {"true", "1", "t", "yes", "y", "on"}
_FALSE_STRINGS = {"false", "0", "f", "no", "n", "off"}


class String(Node):
    """
    Assertions on a text value.

    Example:
        s = e.string("Hello, World")
        s.has_prefix("Hello").contains("World").length().is_equal(12)
    """

    @property
    def raw(self) -> str:
        return self._value

    def length(self) -> Number:
        """Number node holding the length of the string."""
        from .number import Number

        with self._chain.scope("length") as chain:
            return Number(chain.spawn(), float(len(self._value)))

    def is_empty(self) -> String:
        with self._chain.scope("is_empty") as chain:
            if not chain.failed:
                chain.check(
                    self._value == "",
                    AssertionType.EMPTY,
                    "expected: string is empty",
                    actual=self._value,
                )
        return self

    def not_empty(self) -> String:
        with self._chain.scope("not_empty") as chain:
            if not chain.failed:
                chain.check(
                    self._value != "",
                    AssertionType.NOT_EMPTY,
                    "expected: string is non-empty",
                    actual=self._value,
                )
        return self

    def is_equal(self, value: str) -> String:
        with self._chain.scope("is_equal", value) as chain:
            if not chain.failed and self._require_str(value):
                chain.check(
                    self._value == value,
                    AssertionType.EQUAL,
                    "expected: strings are equal",
                    actual=self._value,
                    expected=value,
                )
        return self

    def not_equal(self, value: str) -> String:
        with self._chain.scope("not_equal", value) as chain:
            if not chain.failed and self._require_str(value):
                chain.check(
                    self._value != value,
                    AssertionType.NOT_EQUAL,
                    "expected: strings are non-equal",
                    actual=self._value,
                    expected=value,
                )
        return self

    def is_equal_fold(self, value: str) -> String:
        """Case-insensitive equality."""
        with self._chain.scope("is_equal_fold", value) as chain:
            if not chain.failed and self._require_str(value):
                chain.check(
                    self._value.casefold() == value.casefold(),
                    AssertionType.EQUAL,
                    "expected: strings are equal (if folded)",
                    actual=self._value,
                    expected=value,
                )
        return self

    def in_list(self, *values: str) -> String:
        with self._chain.scope("in_list", *values) as chain:
            if not chain.failed and all(self._require_str(v) for v in values):
                self._check_in_list(values)
        return self

    def contains(self, value: str) -> String:
        with self._chain.scope("contains", value) as chain:
            if not chain.failed and self._require_str(value):
                chain.check(
                    value in self._value,
                    AssertionType.CONTAINS_SUBSET,
                    "expected: string contains sub-string",
                    actual=self._value,
                    expected=value,
                )
        return self

    def not_contains(self, value: str) -> String:
        with self._chain.scope("not_contains", value) as chain:
            if not chain.failed and self._require_str(value):
                chain.check(
                    value not in self._value,
                    AssertionType.NOT_CONTAINS_SUBSET,
                    "expected: string does not contain sub-string",
                    actual=self._value,
                    expected=value,
                )
        return self

    def contains_fold(self, value: str) -> String:
        """Case-insensitive containment."""
        with self._chain.scope("contains_fold", value) as chain:
            if not chain.failed and self._require_str(value):
                chain.check(
                    value.casefold() in self._value.casefold(),
                    AssertionType.CONTAINS_SUBSET,
                    "expected: string contains sub-string (if folded)",
                    actual=self._value,
                    expected=value,
                )
        return self

    def has_prefix(self, value: str) -> String:
        with self._chain.scope("has_prefix", value) as chain:
            if not chain.failed and self._require_str(value):
                chain.check(
                    self._value.startswith(value),
                    AssertionType.CONTAINS_SUBSET,
                    "expected: string has prefix",
                    actual=self._value,
                    expected=value,
                )
        return self

    def has_suffix(self, value: str) -> String:
        with self._chain.scope("has_suffix", value) as chain:
            if not chain.failed and self._require_str(value):
                chain.check(
                    self._value.endswith(value),
                    AssertionType.CONTAINS_SUBSET,
                    "expected: string has suffix",
                    actual=self._value,
                    expected=value,
                )
        return self

    def matches(self, pattern: str) -> String:
        """Assert the string matches a regular expression (re.search)."""
        with self._chain.scope("matches", pattern) as chain:
            if not chain.failed:
                regexp = self._compile(pattern)
                if regexp is not None:
                    chain.check(
                        regexp.search(self._value) is not None,
                        AssertionType.MATCH_REGEXP,
                        "expected: string matches regular expression",
                        actual=self._value,
                        expected=pattern,
                    )
        return self

    def not_matches(self, pattern: str) -> String:
        with self._chain.scope("not_matches", pattern) as chain:
            if not chain.failed:
                regexp = self._compile(pattern)
                if regexp is not None:
                    chain.check(
                        regexp.search(self._value) is None,
                        AssertionType.NOT_MATCH_REGEXP,
                        "expected: string does not match regular expression",
                        actual=self._value,
                        expected=pattern,
                    )
        return self

    def is_ascii(self) -> String:
        with self._chain.scope("is_ascii") as chain:
            if not chain.failed:
                chain.check(
                    self._value.isascii(),
                    AssertionType.VALID,
                    "expected: string contains only ASCII characters",
                    actual=self._value,
                )
        return self

    def as_number(self) -> Number:
        """Parse the string as a number."""
        from .number import Number

        with self._chain.scope("as_number") as chain:
            if chain.failed:
                return Number(chain.spawn(), 0.0)
            try:
                number = float(self._value)
            except ValueError:
                chain.fail(
                    AssertionType.VALID,
                    "expected: string can be parsed as a number",
                    actual=self._value,
                )
                return Number(chain.spawn(), 0.0)
            if not math.isfinite(number):
                chain.fail(
                    AssertionType.VALID,
                    "expected: string is a finite number",
                    actual=self._value,
                )
                return Number(chain.spawn(), 0.0)
            return Number(chain.spawn(), number)

    def as_boolean(self) -> Boolean:
        """Parse the string as a boolean ("true", "yes", "1", "off", ...)."""
        from .boolean import Boolean

        with self._chain.scope("as_boolean") as chain:
            lowered = self._value.strip().lower()
            if not chain.failed and lowered not in _TRUE_STRINGS | _FALSE_STRINGS:
                chain.fail(
                    AssertionType.VALID,
                    "expected: string can be parsed as a boolean",
                    actual=self._value,
                )
            return Boolean(chain.spawn(), lowered in _TRUE_STRINGS)

    def _require_str(self, value: object) -> bool:
        if isinstance(value, str):
            return True
        self._chain.fail(
            AssertionType.USAGE,
            f"unexpected argument of type {type(value).__name__}, expected str",
            actual=repr(value),
        )
        return False

    def _compile(self, pattern: str) -> re.Pattern[str] | None:
        try:
            return re.compile(pattern)
        except (re.error, TypeError) as e:
            self._chain.fail(
                AssertionType.USAGE,
                f"invalid regular expression: {e}",
                actual=repr(pattern),
            )
            return None
