"""
Shared fixtures.

Most tests build an Expect session around a RecordingHandler, so they can
inspect every result the chain let through instead of catching exceptions.
"""

import pytest

from cadence.assertions import AssertionHandler, AssertionResult
from cadence.config import Config
from cadence.expect import Expect


class RecordingHandler(AssertionHandler):
    """Keeps every result it receives."""

    def __init__(self):
        self.successes: list[AssertionResult] = []
        self.failures: list[AssertionResult] = []

    def success(self, result: AssertionResult) -> None:
        self.successes.append(result)

    def failure(self, result: AssertionResult) -> None:
        self.failures.append(result)

    @property
    def calls(self) -> int:
        return len(self.successes) + len(self.failures)

    @property
    def last_failure(self) -> AssertionResult:
        assert self.failures, "no failure was reported"
        return self.failures[-1]

    def reset(self) -> None:
        self.successes.clear()
        self.failures.clear()


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def expect(handler):
    return Expect(Config(test_name="test_case", assertion_handler=handler))
