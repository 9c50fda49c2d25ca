"""
Expect: the root of an assertion session.

An Expect instance owns the root chain of one test. Every node it hands
out gets its own chain spawned from the root, so a failure on one value
never suppresses checks on another.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Any, TypeVar

from .assertions.chain import Chain
from .assertions.models import AssertionType
from .assertions.reporters import FatalReporter
from .canonical import CanonicalizationError, normalize
from .config.models import Config
from .environment import BoundEnvironment, Environment
from .nodes import Array, Boolean, Node, Number, Object, Response, String, Value
from .nodes.value import type_name
from .transport.base import BaseClient
from .transport.models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

NodeT = TypeVar("NodeT", bound=Node)


class Expect:
    """
    Entry point for building assertion nodes.

    Example:
        e = Expect.default("test_get_user", base_url="http://localhost:8000")

        e.value({"id": 1}).object().value("id").number().is_equal(1)

        resp = await e.send(HttpRequest("GET", "/users/1"))
        resp.status(200).json().path("$.name").string().is_equal("alice")
    """

    def __init__(self, config: Config):
        # A client created here is open while at least one send() is in flight
        self._owns_client = config.owns_client
        self._open_sends = 0
        self._client_lock = asyncio.Lock()
        self._config = config.with_defaults()
        self._chain = Chain(
            self._config.assertion_handler,
            self._config.environment,
            test_name=self._config.test_name,
        )
        logger.info(f"Expect session started: {self._config.test_name or '<unnamed>'}")

    @classmethod
    def default(cls, test_name: str = "", base_url: str = "") -> Expect:
        """Session that raises ExpectationFailed on the first failed check."""
        return cls(Config(test_name=test_name, base_url=base_url, reporter=FatalReporter()))

    @property
    def config(self) -> Config:
        return self._config

    @property
    def chain(self) -> Chain:
        return self._chain

    @property
    def environment(self) -> Environment:
        return self._config.environment

    @property
    def client(self) -> BaseClient:
        return self._config.client

    def env(self) -> BoundEnvironment:
        """Session environment. Access failures are reported on a chain of their own."""
        with self._chain.scope("env") as chain:
            return chain.spawn().env()

    # ─────────────────────────────────────────────────────────────────────
    # Value nodes
    # ─────────────────────────────────────────────────────────────────────

    def value(self, value: Any) -> Value:
        """Wrap any value. Unsupported values are reported as invalid."""
        return self._root("value", Value, value)

    def object(self, value: Any) -> Object:
        return self._root("object", Object, value, {})

    def array(self, value: Any) -> Array:
        return self._root("array", Array, value, [])

    def string(self, value: Any) -> String:
        return self._root("string", String, value, "")

    def number(self, value: Any) -> Number:
        return self._root("number", Number, value, 0.0)

    def boolean(self, value: Any) -> Boolean:
        return self._root("boolean", Boolean, value, False)

    def _root(self, name: str, node_type: type[NodeT], value: Any, zero: Any = None) -> NodeT:
        """
        Normalize `value` and wrap it in a node on a freshly spawned chain.

        For typed nodes `zero` is the value wrapped when `value` has the
        wrong type; its type is the one required.
        """
        with self._chain.scope(name) as chain:
            child = chain.spawn()
            try:
                data = normalize(value)
            except CanonicalizationError as e:
                child.fail(
                    AssertionType.VALID,
                    f"expected: value is representable as JSON: {e}",
                    actual=repr(value),
                )
                return node_type(child, zero)

            if zero is not None and type(data) is not type(zero):
                child.fail(
                    AssertionType.TYPE,
                    f"expected: value is {type_name(zero)}",
                    f"actual type: {type_name(data)}",
                    actual=data,
                )
                return node_type(child, zero)

            return node_type(child, data)

    # ─────────────────────────────────────────────────────────────────────
    # HTTP
    # ─────────────────────────────────────────────────────────────────────

    def response(self, response: HttpResponse) -> Response:
        """
        Wrap a received response.

        A response carrying a transport error is reported as a failed
        operation, and every check on the returned node is suppressed.
        """
        with self._chain.scope("response") as chain:
            child = chain.spawn()
            if response.error is not None:
                logger.warning(f"Request failed: {response.error.message}")
                child.fail(
                    AssertionType.OPERATION,
                    f"request failed: {response.error.message}",
                    actual=response.error.to_dict(),
                )
            return Response(child, response)

    async def send(self, request: HttpRequest) -> Response:
        """
        Send a request through the configured client and wrap the result.

        A relative URL is resolved against the configured base_url.
        """
        request = replace(request, url=self.resolve_url(request.url))
        client = self._config.client

        if self._owns_client:
            await self._open_client()
            try:
                response = await client.send(request)
            finally:
                await self._close_client()
        else:
            response = await client.send(request)

        return self.response(response)

    async def _open_client(self) -> None:
        async with self._client_lock:
            if self._open_sends == 0:
                await self._config.client.connect()
            self._open_sends += 1

    async def _close_client(self) -> None:
        async with self._client_lock:
            self._open_sends -= 1
            if self._open_sends == 0:
                await self._config.client.disconnect()

    def resolve_url(self, url: str) -> str:
        """Join a relative URL with base_url. Absolute URLs are returned as is."""
        base = self._config.base_url
        if not base or url.startswith(("http://", "https://")):
            return url
        if not url:
            return base
        return f"{base.rstrip('/')}/{url.lstrip('/')}"

    def __repr__(self) -> str:
        return f"Expect(test_name={self._config.test_name!r}, base_url={self._config.base_url!r})"
