"""
Assertion result models.

This module defines the structured description of a single check:
what kind of check it was, where in the chain it happened, what was
expected, what was found, and the list of errors (empty on success).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AssertionType(str, Enum):
    """Kind of check that produced a result."""
    USAGE = "usage"  # invalid arguments passed by the caller
    OPERATION = "operation"  # operation failed, e.g. request could not be sent
    TYPE = "type"
    NOT_TYPE = "not_type"
    VALID = "valid"
    NOT_VALID = "not_valid"
    NIL = "nil"
    NOT_NIL = "not_nil"
    EMPTY = "empty"
    NOT_EMPTY = "not_empty"
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"
    IN_RANGE = "in_range"
    NOT_IN_RANGE = "not_in_range"
    IN_LIST = "in_list"
    NOT_IN_LIST = "not_in_list"
    CONTAINS_KEY = "contains_key"
    NOT_CONTAINS_KEY = "not_contains_key"
    CONTAINS_ELEMENT = "contains_element"
    NOT_CONTAINS_ELEMENT = "not_contains_element"
    CONTAINS_SUBSET = "contains_subset"
    NOT_CONTAINS_SUBSET = "not_contains_subset"
    MATCH_REGEXP = "match_regexp"
    NOT_MATCH_REGEXP = "not_match_regexp"
    MATCH_PATH = "match_path"


@dataclass(frozen=True)
class AssertionValue:
    """Boxed value, so that None can be a real expected or actual value."""
    value: Any


@dataclass
class AssertionResult:
    """
    Result of a single assertion check.

    Attributes:
        type: What kind of check was made
        errors: Discovered errors; empty means the check passed
        actual: The value that was checked
        expected: What was expected (a list of values for range/list checks)
        reference: Value the actual was compared against, if not "expected"
        delta: Allowed numeric delta for approximate comparisons
        path: Scope breadcrumb of the chain, e.g. ("value()", "object()")
        alias_path: Breadcrumb after alias() rewrites, same as path if none
        test_name: Name of the running test, if configured
    """
    type: AssertionType
    errors: list[str] = field(default_factory=list)
    actual: AssertionValue | None = None
    expected: AssertionValue | None = None
    reference: AssertionValue | None = None
    delta: AssertionValue | None = None
    path: tuple[str, ...] = ()
    alias_path: tuple[str, ...] = ()
    test_name: str = ""

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    @classmethod
    def passed_result(cls, type: AssertionType, **values: Any) -> AssertionResult:
        """Create a passing result."""
        return cls(type=type, **_box(values))

    @classmethod
    def failed_result(
        cls,
        type: AssertionType,
        errors: list[str],
        **values: Any,
    ) -> AssertionResult:
        """Create a failing result. At least one error is required."""
        if not errors:
            raise ValueError("failed_result() requires at least one error")
        return cls(type=type, errors=list(errors), **_box(values))


_VALUE_FIELDS = ("actual", "expected", "reference", "delta")


def _box(values: dict[str, Any]) -> dict[str, AssertionValue]:
    unknown = set(values) - set(_VALUE_FIELDS)
    if unknown:
        raise TypeError(f"Unknown result fields: {', '.join(sorted(unknown))}")
    return {
        name: value if isinstance(value, AssertionValue) else AssertionValue(value)
        for name, value in values.items()
    }
