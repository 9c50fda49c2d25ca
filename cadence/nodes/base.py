"""
Base class for assertion nodes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from ..assertions.chain import Chain
from ..assertions.models import AssertionType
from ..canonical import CanonicalizationError, equal, normalize

if TYPE_CHECKING:
    from ..environment import BoundEnvironment

NodeT = TypeVar("NodeT", bound="Node")


class Node:
    """
    A value plus the chain its checks report through.

    Subclasses implement typed assertion methods. Every method enters a
    scope on the chain, returns early if the chain has already failed,
    and otherwise reports exactly one result (or none for pure getters).
    """

    def __init__(self, chain: Chain, value: Any):
        self._chain = chain
        self._value = value

    @property
    def raw(self) -> Any:
        """The wrapped value."""
        return self._value

    @property
    def chain(self) -> Chain:
        return self._chain

    def alias(self: NodeT, name: str) -> NodeT:
        """Show `name` instead of the full breadcrumb in failure messages."""
        self._chain.alias(name)
        return self

    def env(self) -> BoundEnvironment:
        """Session environment, reporting access failures on this node."""
        return self._chain.env()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    # ─────────────────────────────────────────────────────────────────────
    # Helpers shared by subclasses
    # ─────────────────────────────────────────────────────────────────────

    def _normalized_arg(self, value: Any) -> tuple[Any, bool]:
        """
        Normalize a caller-supplied argument.

        Comparisons canonicalize it again, the normalized form is what
        failure messages show. An unsupported argument is reported as a
        usage failure. Returns (normalized value, ok).
        """
        try:
            return normalize(value), True
        except CanonicalizationError as e:
            self._chain.fail(
                AssertionType.USAGE,
                f"unsupported argument: {e}",
                actual=repr(value),
            )
            return None, False

    def _check_equal(self, expected: Any, negate: bool = False) -> None:
        """is_equal / not_equal using canonical equality."""
        arg, ok = self._normalized_arg(expected)
        if not ok:
            return
        same = self._equal(arg)
        if same is None:
            return
        if negate:
            self._chain.check(
                not same,
                AssertionType.NOT_EQUAL,
                "expected: values are non-equal",
                actual=self._value,
                expected=arg,
            )
        else:
            self._chain.check(
                same,
                AssertionType.EQUAL,
                "expected: values are equal",
                actual=self._value,
                expected=arg,
            )

    def _check_in_list(self, values: tuple[Any, ...], negate: bool = False) -> None:
        """in_list / not_in_list using canonical equality."""
        if not values:
            self._chain.fail(AssertionType.USAGE, "unexpected empty list argument")
            return
        arg, ok = self._normalized_arg(list(values))
        if not ok:
            return
        matches = [self._equal(v) for v in arg]
        if None in matches:
            return
        found = any(matches)
        if negate:
            self._chain.check(
                not found,
                AssertionType.NOT_IN_LIST,
                "expected: value is not equal to any of the values",
                actual=self._value,
                expected=arg,
            )
        else:
            self._chain.check(
                found,
                AssertionType.IN_LIST,
                "expected: value is equal to one of the values",
                actual=self._value,
                expected=arg,
            )

    def _equal(self, other: Any) -> bool | None:
        """Canonical equality against the wrapped value, None if it has no canonical form."""
        try:
            return equal(self._value, other)
        except CanonicalizationError as e:
            self._chain.fail(
                AssertionType.VALID,
                f"value has no canonical form: {e}",
                actual=repr(self._value),
            )
            return None

    def _require_index(self, index: Any) -> bool:
        if isinstance(index, int) and not isinstance(index, bool):
            return True
        self._chain.fail(
            AssertionType.USAGE,
            f"unexpected index of type {type(index).__name__}, expected int",
            actual=repr(index),
        )
        return False

    def _require_key(self, key: Any) -> bool:
        if isinstance(key, str):
            return True
        self._chain.fail(
            AssertionType.USAGE,
            f"unexpected key of type {type(key).__name__}, expected str",
            actual=repr(key),
        )
        return False
