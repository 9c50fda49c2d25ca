"""
HTTP response node.
"""

from __future__ import annotations

import json
import logging
from enum import Enum

from ..assertions.models import AssertionType
from ..canonical import CanonicalizationError, normalize
from ..transport.models import HttpResponse
from .base import Node
from .number import Number
from .object import Object
from .string import String
from .value import Value

logger = logging.getLogger(__name__)


class StatusRange(str, Enum):
    """HTTP status code classes."""
    INFORMATIONAL = "1xx"
    SUCCESS = "2xx"
    REDIRECT = "3xx"
    CLIENT_ERROR = "4xx"
    SERVER_ERROR = "5xx"

    def contains(self, status: int) -> bool:
        return int(self.value[0]) * 100 <= status < (int(self.value[0]) + 1) * 100


def status_range_of(status: int) -> StatusRange | None:
    for status_range in StatusRange:
        if status_range.contains(status):
            return status_range
    return None


class Response(Node):
    """
    Assertions on a received HTTP response.

    Example:
        resp = await e.send(HttpRequest("GET", "/users/1"))
        resp.status(200).content_type("application/json")
        resp.json().object().value("name").string().is_equal("alice")
    """

    @property
    def raw(self) -> HttpResponse:
        return self._value

    def status(self, code: int) -> Response:
        with self._chain.scope("status", code) as chain:
            if not chain.failed:
                chain.check(
                    self._value.status == code,
                    AssertionType.EQUAL,
                    f"expected: http status {code}",
                    actual=_status_text(self._value),
                    expected=code,
                )
        return self

    def status_range(self, status_range: StatusRange) -> Response:
        """Assert the status code belongs to a class, e.g. StatusRange.SUCCESS."""
        with self._chain.scope("status_range", status_range.value) as chain:
            if not chain.failed:
                actual_range = status_range_of(self._value.status)
                chain.check(
                    status_range.contains(self._value.status),
                    AssertionType.IN_RANGE,
                    f"expected: http status in range {status_range.value}",
                    actual=f"{_status_text(self._value)} ({actual_range.value if actual_range else 'unknown'})",
                    expected=status_range.value,
                )
        return self

    def header(self, name: str) -> String:
        """String node for a header value. A missing header is a failure."""
        with self._chain.scope("header", name) as chain:
            if chain.failed or not self._require_key(name):
                return String(chain.spawn(), "")
            value = self._value.headers.get(name.lower())
            if value is None:
                chain.fail(
                    AssertionType.CONTAINS_KEY,
                    f"expected: response contains header {name!r}",
                    actual=sorted(self._value.headers),
                    expected=name,
                )
            return String(chain.spawn(), value or "")

    def headers(self) -> Object:
        """Object node of all headers, with lower-cased names."""
        with self._chain.scope("headers") as chain:
            return Object(chain.spawn(), dict(self._value.headers))

    def content_type(self, media_type: str, charset: str | None = None) -> Response:
        """Assert the Content-Type media type, and the charset if given."""
        with self._chain.scope("content_type", media_type, charset) as chain:
            if chain.failed:
                return self
            actual = self._value.headers.get("content-type", "")
            ok = self._value.content_type == media_type.lower()
            if ok and charset is not None:
                ok = (self._value.charset or "") == charset.lower()
            expected = media_type if charset is None else f"{media_type}; charset={charset}"
            chain.check(
                ok,
                AssertionType.EQUAL,
                "expected: content type matches",
                actual=actual,
                expected=expected,
            )
        return self

    def body(self) -> String:
        """String node holding the decoded body."""
        with self._chain.scope("body") as chain:
            return String(chain.spawn(), self._value.text)

    def json(self) -> Value:
        """Value node holding the decoded JSON body. Invalid JSON is a failure."""
        with self._chain.scope("json") as chain:
            if chain.failed:
                return Value(chain.spawn(), None)
            try:
                data = normalize(self._value.json())
            except (json.JSONDecodeError, CanonicalizationError) as e:
                logger.warning(f"Response body is not valid JSON: {e}")
                chain.fail(
                    AssertionType.VALID,
                    f"expected: body is valid JSON: {e}",
                    actual=self._value.text,
                )
                return Value(chain.spawn(), None)
            return Value(chain.spawn(), data)

    def elapsed(self) -> Number:
        """Number node holding the round-trip time in milliseconds."""
        with self._chain.scope("elapsed") as chain:
            return Number(chain.spawn(), float(self._value.elapsed_ms))

    def __repr__(self) -> str:
        return f"Response({_status_text(self._value)})"


def _status_text(response: HttpResponse) -> str:
    if response.reason:
        return f"{response.status} {response.reason}"
    return str(response.status)
