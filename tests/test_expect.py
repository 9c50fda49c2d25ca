"""
Tests for the Expect session root.
"""

import logging
from decimal import Decimal

import pytest

from cadence.assertions import (
    AssertionType,
    CollectingReporter,
    ExpectationFailed,
    StdLogger,
)
from cadence.config import Config, ConfigError
from cadence.environment import Environment
from cadence.expect import Expect


class TestConstruction:

    def test_requires_reporter_or_handler(self):
        with pytest.raises(ConfigError):
            Expect(Config())

    def test_default_is_fatal(self):
        e = Expect.default("test_default")
        e.number(1).is_equal(1)
        with pytest.raises(ExpectationFailed) as exc_info:
            e.number(1).is_equal(2)
        assert "test name: test_default" in str(exc_info.value)

    def test_shared_environment(self, handler):
        environment = Environment()
        first = Expect(Config(assertion_handler=handler, environment=environment))
        second = Expect(Config(assertion_handler=handler, environment=environment))
        first.env().put("token", "t")
        assert second.env().get_string("token") == "t"

    def test_success_logging(self, caplog):
        reporter = CollectingReporter()
        e = Expect(Config(reporter=reporter, logger=StdLogger()))
        with caplog.at_level(logging.INFO, logger="cadence"):
            e.string("a").is_equal("a")
        assert "assertion passed" in caplog.text
        assert not reporter.failed


class TestRootNodes:

    def test_root_failure_does_not_poison_session(self, expect, handler):
        expect.object("not an object")
        assert handler.last_failure.type == AssertionType.TYPE
        assert not expect.chain.failed

        expect.string("ok").is_equal("ok")
        assert len(handler.successes) == 1

    @pytest.mark.parametrize("method,value", [
        ("object", [1]),
        ("array", {"a": 1}),
        ("string", 1),
        ("number", "1"),
        ("boolean", None),
    ])
    def test_type_mismatch(self, expect, handler, method, value):
        node = getattr(expect, method)(value)
        assert handler.last_failure.type == AssertionType.TYPE
        assert node.chain.failed

    def test_unsupported_value(self, expect, handler):
        node = expect.value(float("nan"))
        assert handler.last_failure.type == AssertionType.VALID
        assert node.raw is None

    def test_self_referencing_value(self, expect, handler):
        data = {"id": 1}
        data["self"] = data
        node = expect.object(data)
        assert handler.last_failure.type == AssertionType.VALID
        assert node.raw == {}
        assert not expect.chain.failed

    def test_values_are_normalized(self, expect):
        assert expect.number(Decimal("1.5")).raw == 1.5
        assert expect.array((1, 2)).raw == [1.0, 2.0]

    def test_failure_message_carries_test_name(self, expect, handler):
        expect.number(1).is_equal(2)
        assert handler.last_failure.test_name == "test_case"
        assert handler.last_failure.path == ("number()", "is_equal(2)")


class TestResolveUrl:

    @pytest.mark.parametrize("base_url,url,expected", [
        ("http://api", "/users", "http://api/users"),
        ("http://api/", "users", "http://api/users"),
        ("http://api/v1", "", "http://api/v1"),
        ("http://api", "https://other/x", "https://other/x"),
        ("", "/users", "/users"),
    ])
    def test_resolve(self, handler, base_url, url, expected):
        e = Expect(Config(assertion_handler=handler, base_url=base_url))
        assert e.resolve_url(url) == expected


class TestFailureSemantics:
    """End-to-end suppression and isolation through the session API."""

    def test_suppression_on_failed_node(self, expect, handler):
        user = expect.object({"id": 1})
        user.value("name")
        calls = handler.calls

        user.contains_key("id").is_empty()
        user.value("id").number().is_equal(1)
        assert handler.calls == calls

    def test_isolation_between_elements(self, expect, handler):
        arr = expect.array(["foo", 123])
        first, second = arr.element(0), arr.element(1)

        text = second.string()
        first.string().is_equal("foo")
        text.is_equal("123")

        assert [r.type for r in handler.failures] == [AssertionType.TYPE]
        assert len(handler.successes) == 2

    def test_non_fatal_reporter_collects_each_root_cause(self):
        reporter = CollectingReporter()
        e = Expect(Config(test_name="collect", reporter=reporter))

        e.number(1).is_equal(2).gt(5)
        e.string("a").is_equal("b")

        assert len(reporter.messages) == 2
        with pytest.raises(ExpectationFailed):
            reporter.raise_for_failures()
