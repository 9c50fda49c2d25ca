"""
Reporters and loggers used by the default assertion handler.

A Reporter receives formatted failure messages. It may return normally
(non-fatal, the test keeps going) or raise to abort the current test.
A Logger receives informational messages, e.g. successful checks.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod


class ExpectationFailed(AssertionError):
    """Raised by FatalReporter to abort the current test."""


class Reporter(ABC):
    """Accepts failure messages."""

    @abstractmethod
    def report(self, message: str) -> None:
        """Report a failure. Allowed to raise and never return."""


class Logger(ABC):
    """Accepts informational messages."""

    @abstractmethod
    def log(self, message: str) -> None:
        """Write a message to the test log."""


class FatalReporter(Reporter):
    """
    Aborts the test on the first failure by raising ExpectationFailed.

    ExpectationFailed is an AssertionError, so pytest and unittest show
    it as a regular test failure.
    """

    def report(self, message: str) -> None:
        raise ExpectationFailed(message)


class CollectingReporter(Reporter):
    """
    Non-fatal reporter: records every failure and lets the test continue.

    Call raise_for_failures() at the end of the test to fail it if
    anything was reported.

    Example:
        reporter = CollectingReporter()
        e = Expect(Config(reporter=reporter))
        e.number(1).is_equal(2)
        e.string("a").is_equal("b")
        reporter.raise_for_failures()  # raises with both messages
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._messages: list[str] = []

    @property
    def messages(self) -> list[str]:
        with self._lock:
            return list(self._messages)

    @property
    def failed(self) -> bool:
        with self._lock:
            return bool(self._messages)

    def report(self, message: str) -> None:
        with self._lock:
            self._messages.append(message)

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()

    def raise_for_failures(self) -> None:
        """Raise ExpectationFailed with all collected messages, if any."""
        messages = self.messages
        if not messages:
            return
        header = f"{len(messages)} assertion(s) failed:"
        raise ExpectationFailed("\n\n".join([header, *messages]))


class StdLogger(Logger):
    """Writes messages to a standard library logger at INFO level."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO):
        self.logger = logger or logging.getLogger("cadence")
        self.level = level

    def log(self, message: str) -> None:
        self.logger.log(self.level, message)
