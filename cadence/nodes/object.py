"""
Object (mapping) node.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..assertions.models import AssertionType
from ..canonical import canonicalize, contains, equal, is_subset
from .base import Node

if TYPE_CHECKING:
    from .array import Array
    from .value import Value


class Object(Node):
    """
    Assertions on a JSON object.

    Keys are text, values are normalized (see cadence.canonical).

    Example:
        obj = e.object({"id": 1, "name": "alice", "tags": ["a"]})
        obj.contains_key("id").contains_subset({"name": "alice"})
        obj.value("tags").array().contains_all("a")
    """

    @property
    def raw(self) -> dict[str, Any]:
        return self._value

    # ─────────────────────────────────────────────────────────────────────
    # Navigation
    # ─────────────────────────────────────────────────────────────────────

    def keys(self) -> Array:
        """Array node holding the object's keys, sorted."""
        from .array import Array

        with self._chain.scope("keys") as chain:
            return Array(chain.spawn(), sorted(self._value))

    def values(self) -> Array:
        """Array node holding the object's values, ordered by key."""
        from .array import Array

        with self._chain.scope("values") as chain:
            return Array(chain.spawn(), [self._value[k] for k in sorted(self._value)])

    def value(self, key: str) -> Value:
        """Value node for a key. A missing key is reported as a failure."""
        from .value import Value

        with self._chain.scope("value", key) as chain:
            if chain.failed:
                return Value(chain.spawn(), None)
            if not self._require_key(key):
                return Value(chain.spawn(), None)
            if key not in self._value:
                chain.fail(
                    AssertionType.CONTAINS_KEY,
                    f"expected: object contains key {key!r}",
                    actual=sorted(self._value),
                    expected=key,
                )
            return Value(chain.spawn(), self._value.get(key))

    def iter(self) -> dict[str, Value]:
        """Value node per key, each with its own chain."""
        from .value import Value

        with self._chain.scope("iter") as chain:
            return {key: Value(chain.spawn(), self._value[key]) for key in sorted(self._value)}

    def path(self, expr: str) -> Value:
        """Evaluate a JSONPath expression against the object."""
        from .value import path_value

        return path_value(self._chain, self._value, expr)

    # ─────────────────────────────────────────────────────────────────────
    # Assertions
    # ─────────────────────────────────────────────────────────────────────

    def is_empty(self) -> Object:
        with self._chain.scope("is_empty") as chain:
            if not chain.failed:
                chain.check(
                    not self._value,
                    AssertionType.EMPTY,
                    "expected: object is empty",
                    actual=self._value,
                )
        return self

    def not_empty(self) -> Object:
        with self._chain.scope("not_empty") as chain:
            if not chain.failed:
                chain.check(
                    bool(self._value),
                    AssertionType.NOT_EMPTY,
                    "expected: object is non-empty",
                    actual=self._value,
                )
        return self

    def is_equal(self, value: Any) -> Object:
        """Canonical equality; records compare equal to matching mappings."""
        with self._chain.scope("is_equal", value) as chain:
            if not chain.failed:
                self._check_equal(value)
        return self

    def not_equal(self, value: Any) -> Object:
        with self._chain.scope("not_equal", value) as chain:
            if not chain.failed:
                self._check_equal(value, negate=True)
        return self

    def in_list(self, *values: Any) -> Object:
        with self._chain.scope("in_list", *values) as chain:
            if not chain.failed:
                self._check_in_list(values)
        return self

    def contains_key(self, key: str) -> Object:
        with self._chain.scope("contains_key", key) as chain:
            if not chain.failed and self._require_key(key):
                chain.check(
                    key in self._value,
                    AssertionType.CONTAINS_KEY,
                    f"expected: object contains key {key!r}",
                    actual=sorted(self._value),
                    expected=key,
                )
        return self

    def not_contains_key(self, key: str) -> Object:
        with self._chain.scope("not_contains_key", key) as chain:
            if not chain.failed and self._require_key(key):
                chain.check(
                    key not in self._value,
                    AssertionType.NOT_CONTAINS_KEY,
                    f"expected: object does not contain key {key!r}",
                    actual=sorted(self._value),
                    expected=key,
                )
        return self

    def contains_value(self, value: Any) -> Object:
        return self._contains_value("contains_value", value, negate=False)

    def not_contains_value(self, value: Any) -> Object:
        return self._contains_value("not_contains_value", value, negate=True)

    def contains_subset(self, subset: Any) -> Object:
        """
        Assert every key of `subset` is present with a matching value.

        Nested objects are matched as subsets too, arrays must be equal.
        """
        return self._contains_subset("contains_subset", subset, negate=False)

    def not_contains_subset(self, subset: Any) -> Object:
        return self._contains_subset("not_contains_subset", subset, negate=True)

    def is_value_equal(self, key: str, value: Any) -> Object:
        """Assert the object has `key` and its value equals `value`."""
        with self._chain.scope("is_value_equal", key, value) as chain:
            if chain.failed or not self._require_key(key):
                return self
            if key not in self._value:
                chain.fail(
                    AssertionType.CONTAINS_KEY,
                    f"expected: object contains key {key!r}",
                    actual=sorted(self._value),
                    expected=key,
                )
                return self
            arg, ok = self._normalized_arg(value)
            if ok:
                chain.check(
                    equal(self._value[key], arg),
                    AssertionType.EQUAL,
                    f"expected: value for key {key!r} is equal to given value",
                    actual=self._value[key],
                    expected=arg,
                )
        return self

    def not_value_equal(self, key: str, value: Any) -> Object:
        with self._chain.scope("not_value_equal", key, value) as chain:
            if chain.failed or not self._require_key(key):
                return self
            if key not in self._value:
                chain.fail(
                    AssertionType.CONTAINS_KEY,
                    f"expected: object contains key {key!r}",
                    actual=sorted(self._value),
                    expected=key,
                )
                return self
            arg, ok = self._normalized_arg(value)
            if ok:
                chain.check(
                    not equal(self._value[key], arg),
                    AssertionType.NOT_EQUAL,
                    f"expected: value for key {key!r} is non-equal to given value",
                    actual=self._value[key],
                    expected=arg,
                )
        return self

    def _contains_value(self, name: str, value: Any, negate: bool) -> Object:
        with self._chain.scope(name, value) as chain:
            if chain.failed:
                return self
            arg, ok = self._normalized_arg(value)
            if not ok:
                return self
            found = contains(list(self._value.values()), arg)
            if negate:
                chain.check(
                    not found,
                    AssertionType.NOT_CONTAINS_ELEMENT,
                    "expected: object does not contain value",
                    actual=self._value,
                    expected=arg,
                )
            else:
                chain.check(
                    found,
                    AssertionType.CONTAINS_ELEMENT,
                    "expected: object contains value",
                    actual=self._value,
                    expected=arg,
                )
        return self

    def _contains_subset(self, name: str, subset: Any, negate: bool) -> Object:
        with self._chain.scope(name, subset) as chain:
            if chain.failed:
                return self
            arg, ok = self._normalized_arg(subset)
            if not ok:
                return self
            # an empty subset is contained in anything
            found = canonicalize(arg) is None or is_subset(arg, self._value)
            if negate:
                chain.check(
                    not found,
                    AssertionType.NOT_CONTAINS_SUBSET,
                    "expected: object does not contain subset",
                    actual=self._value,
                    expected=arg,
                )
            else:
                chain.check(
                    found,
                    AssertionType.CONTAINS_SUBSET,
                    "expected: object contains subset",
                    actual=self._value,
                    expected=arg,
                )
        return self
