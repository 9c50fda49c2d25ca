"""
Assertion handlers: the sink every chain reports to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .formatter import DefaultFormatter, Formatter
from .models import AssertionResult
from .reporters import Logger, Reporter


class AssertionHandler(ABC):
    """
    Receives every assertion outcome, successful or failed.

    Custom handlers get the full structured result and are free to ignore
    Formatter and Reporter entirely, e.g. to emit JSON audit records.
    """

    @abstractmethod
    def success(self, result: AssertionResult) -> None:
        """Called for every passed check."""

    @abstractmethod
    def failure(self, result: AssertionResult) -> None:
        """Called for every failed check. May raise to abort the test."""


class DefaultAssertionHandler(AssertionHandler):
    """
    Formats failures and hands them to a Reporter.

    Successful checks are ignored unless a Logger is set, in which case
    a one-line success message is logged (the Reporter is not involved).
    """

    def __init__(
        self,
        reporter: Reporter,
        formatter: Formatter | None = None,
        logger: Logger | None = None,
    ):
        self.reporter = reporter
        self.formatter = formatter or DefaultFormatter()
        self.logger = logger

    def success(self, result: AssertionResult) -> None:
        if self.logger is None:
            return
        self.logger.log(self.formatter.format_success(result))

    def failure(self, result: AssertionResult) -> None:
        message = self.formatter.format_failure(result)
        self.reporter.report(message)
