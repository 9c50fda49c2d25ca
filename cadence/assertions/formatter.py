"""
Formatting of assertion results into human-readable messages.
"""

from __future__ import annotations

import difflib
import json
from abc import ABC, abstractmethod
from typing import Any

from .models import AssertionResult, AssertionType, AssertionValue


# Header line per check kind: "expected <description>"
_DESCRIPTIONS: dict[AssertionType, str] = {
    AssertionType.USAGE: "valid arguments",
    AssertionType.OPERATION: "successful operation",
    AssertionType.TYPE: "value of matching type",
    AssertionType.NOT_TYPE: "value of different type",
    AssertionType.VALID: "valid value",
    AssertionType.NOT_VALID: "invalid value",
    AssertionType.NIL: "null value",
    AssertionType.NOT_NIL: "non-null value",
    AssertionType.EMPTY: "empty value",
    AssertionType.NOT_EMPTY: "non-empty value",
    AssertionType.EQUAL: "values to be equal",
    AssertionType.NOT_EQUAL: "values to be non-equal",
    AssertionType.LT: "value less than reference",
    AssertionType.LE: "value less than or equal to reference",
    AssertionType.GT: "value greater than reference",
    AssertionType.GE: "value greater than or equal to reference",
    AssertionType.IN_RANGE: "value in range",
    AssertionType.NOT_IN_RANGE: "value outside of range",
    AssertionType.IN_LIST: "value equal to one of the list elements",
    AssertionType.NOT_IN_LIST: "value not equal to any of the list elements",
    AssertionType.CONTAINS_KEY: "container with key",
    AssertionType.NOT_CONTAINS_KEY: "container without key",
    AssertionType.CONTAINS_ELEMENT: "container with element",
    AssertionType.NOT_CONTAINS_ELEMENT: "container without element",
    AssertionType.CONTAINS_SUBSET: "container with subset",
    AssertionType.NOT_CONTAINS_SUBSET: "container without subset",
    AssertionType.MATCH_REGEXP: "value matching regular expression",
    AssertionType.NOT_MATCH_REGEXP: "value not matching regular expression",
    AssertionType.MATCH_PATH: "value at path",
}

# Checks where showing a diff between expected and actual makes sense
_DIFF_TYPES = {
    AssertionType.EQUAL,
    AssertionType.CONTAINS_SUBSET,
}


class Formatter(ABC):
    """Renders assertion results as text."""

    @abstractmethod
    def format_success(self, result: AssertionResult) -> str:
        """Render a passed check."""

    @abstractmethod
    def format_failure(self, result: AssertionResult) -> str:
        """Render a failed check."""


class DefaultFormatter(Formatter):
    """
    Built-in renderer.

    Failure messages look like:

        assertion failed: expected values to be equal
          test name: test_user
          assertion: value().object().value('name').string().is_equal('bob')
          errors:
            expected: strings are equal
          expected:
            "bob"
          actual:
            "alice"
    """

    def __init__(
        self,
        disable_paths: bool = False,
        disable_diffs: bool = False,
        max_value_length: int = 2000,
    ):
        self.disable_paths = disable_paths
        self.disable_diffs = disable_diffs
        self.max_value_length = max_value_length

    def format_success(self, result: AssertionResult) -> str:
        line = f"assertion passed: {describe(result.type)}"
        if not self.disable_paths and result.path:
            line += f" [{format_path(result.alias_path or result.path)}]"
        return line

    def format_failure(self, result: AssertionResult) -> str:
        lines = [f"assertion failed: expected {describe(result.type)}"]

        if result.test_name:
            lines.append(f"  test name: {result.test_name}")

        if not self.disable_paths and result.path:
            lines.append(f"  assertion: {format_path(result.path)}")
            if result.alias_path and result.alias_path != result.path:
                lines.append(f"  alias: {format_path(result.alias_path)}")

        if result.errors:
            lines.append("  errors:")
            lines.extend(f"    {error}" for error in result.errors)

        for name in ("expected", "reference", "delta", "actual"):
            boxed = getattr(result, name)
            if boxed is None:
                continue
            lines.append(f"  {name}:")
            lines.extend(
                f"    {line}" for line in self._format_value(boxed.value).splitlines()
            )

        diff = self._format_diff(result)
        if diff:
            lines.append("  diff:")
            lines.extend(f"    {line}" for line in diff)

        return "\n".join(lines)

    def _format_value(self, value: Any) -> str:
        formatted = format_value(value)
        if len(formatted) > self.max_value_length:
            return formatted[: self.max_value_length - 3] + "..."
        return formatted

    def _format_diff(self, result: AssertionResult) -> list[str]:
        if self.disable_diffs or result.type not in _DIFF_TYPES:
            return []
        if result.expected is None or result.actual is None:
            return []

        expected, actual = result.expected.value, result.actual.value
        if not (_diffable(expected) and _diffable(actual)):
            return []

        expected_lines = _diff_lines(expected)
        actual_lines = _diff_lines(actual)
        return list(
            difflib.unified_diff(
                expected_lines,
                actual_lines,
                fromfile="expected",
                tofile="actual",
                lineterm="",
            )
        )


def describe(type: AssertionType) -> str:
    """Short description of what a check of the given kind expects."""
    return _DESCRIPTIONS.get(type, type.value)


def format_path(path: tuple[str, ...]) -> str:
    """Join a scope path into a breadcrumb."""
    return ".".join(path)


def format_value(value: Any) -> str:
    """Format a value for display as indented JSON, falling back to repr()."""
    if isinstance(value, AssertionValue):
        value = value.value
    if value is None:
        return "null"
    try:
        return json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)


def _diffable(value: Any) -> bool:
    if isinstance(value, (dict, list)):
        return True
    return isinstance(value, str) and "\n" in value


def _diff_lines(value: Any) -> list[str]:
    if isinstance(value, str):
        return value.splitlines()
    return format_value(value).splitlines()
