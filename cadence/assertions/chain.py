"""
Assertion chain: failure propagation between nodes.

Every node owns a Chain. The chain keeps the breadcrumb of nested scopes
used in failure messages, remembers whether a check on this node already
failed, and decides whether a result reaches the assertion handler.

Rules:
    - Once a chain has failed, every later report on it is dropped,
      successes included.
    - spawn() creates a child chain with a snapshot of the failed flag.
      Children spawned before a failure stay healthy, children spawned
      after it start out failed. A child failing never affects its parent.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator

from .models import AssertionResult, AssertionType

if TYPE_CHECKING:
    from ..environment import BoundEnvironment, Environment
    from .handler import AssertionHandler

logger = logging.getLogger(__name__)


class Chain:
    """
    Scope tracker and failure gate for one node.

    Example:
        chain = Chain(handler, environment)
        with chain.scope("is_equal", 42):
            chain.check(value == 42, AssertionType.EQUAL, "expected: values are equal",
                        actual=value, expected=42)
    """

    def __init__(
        self,
        handler: AssertionHandler,
        environment: Environment,
        *,
        test_name: str = "",
        name: str = "",
    ):
        self._handler = handler
        self._environment = environment
        self._test_name = test_name
        self._path: list[str] = [name] if name else []
        self._alias_path: list[str] = list(self._path)
        self._failed = False

    @property
    def failed(self) -> bool:
        return self._failed

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(self._path)

    @property
    def alias_path(self) -> tuple[str, ...]:
        return tuple(self._alias_path)

    @property
    def depth(self) -> int:
        return len(self._path)

    @property
    def handler(self) -> AssertionHandler:
        return self._handler

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def test_name(self) -> str:
        return self._test_name

    # ─────────────────────────────────────────────────────────────────────
    # Scopes
    # ─────────────────────────────────────────────────────────────────────

    def enter(self, name: str, *args: Any) -> None:
        """Push a scope label, e.g. enter("value", "id") -> "value('id')"."""
        label = f"{name}({', '.join(repr(a) for a in args)})"
        self._path.append(label)
        self._alias_path.append(label)

    def leave(self) -> None:
        """Pop the most recent scope label."""
        if not self._path:
            raise RuntimeError("Chain.leave() called without matching enter()")
        self._path.pop()
        if self._alias_path:
            self._alias_path.pop()

    @contextmanager
    def scope(self, name: str, *args: Any) -> Iterator[Chain]:
        """Enter a scope for the duration of a with-block."""
        self.enter(name, *args)
        try:
            yield self
        finally:
            self.leave()

    def alias(self, name: str) -> None:
        """Replace the breadcrumb shown in messages with a single name."""
        self._alias_path = [name]

    # ─────────────────────────────────────────────────────────────────────
    # Reporting
    # ─────────────────────────────────────────────────────────────────────

    def report(self, result: AssertionResult) -> None:
        """
        Dispatch a result to the handler, unless this chain already failed.

        The failed flag is set before the handler runs, since a handler may
        raise and never give control back.
        """
        if self._failed:
            return

        result.path = self.path
        result.alias_path = self.alias_path
        result.test_name = self._test_name

        if result.failed:
            self._failed = True
            logger.debug(f"Chain failed at {'.'.join(result.path)}: {result.type.value}")
            self._handler.failure(result)
        else:
            self._handler.success(result)

    def fail(self, type: AssertionType, *errors: str, **values: Any) -> None:
        """Report a failed check."""
        self.report(AssertionResult.failed_result(type, list(errors), **values))

    def succeed(self, type: AssertionType, **values: Any) -> None:
        """Report a passed check."""
        self.report(AssertionResult.passed_result(type, **values))

    def check(self, ok: bool, type: AssertionType, *errors: str, **values: Any) -> bool:
        """Report a check that passed if `ok` is true, failed with `errors` otherwise."""
        if ok:
            self.succeed(type, **values)
        else:
            self.fail(type, *errors, **values)
        return ok

    # ─────────────────────────────────────────────────────────────────────
    # Derivation
    # ─────────────────────────────────────────────────────────────────────

    def spawn(self) -> Chain:
        """
        Create a chain for a derived node.

        The child shares the handler and environment, starts from the
        current breadcrumb, and copies the failed flag as it is right now.
        """
        child = Chain.__new__(Chain)
        child._handler = self._handler
        child._environment = self._environment
        child._test_name = self._test_name
        child._path = list(self._path)
        child._alias_path = list(self._alias_path)
        child._failed = self._failed
        return child

    def env(self) -> BoundEnvironment:
        """Environment view that reports access failures through this chain."""
        from ..environment import BoundEnvironment

        return BoundEnvironment(self._environment, self)

    def __repr__(self) -> str:
        status = "failed" if self._failed else "ok"
        return f"Chain(path={'.'.join(self._path)!r}, status={status})"
