"""
aiohttp-based HTTP client.

Sends HttpRequest objects with an aiohttp.ClientSession and converts
every network problem into an HttpResponse carrying a TransportError.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import time
from typing import TYPE_CHECKING

import aiohttp

from .base import BaseClient
from .models import HttpRequest, HttpResponse, TransportError

if TYPE_CHECKING:
    from ..config.models import AuthConfig

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000


class AiohttpClient(BaseClient):
    """
    HTTP client backed by aiohttp.

    Default headers and authentication are applied to every request;
    per-request headers win over defaults.

    Example:
        async with AiohttpClient(auth_config=AuthConfig(AuthType.BEARER, token="t")) as client:
            response = await client.send(HttpRequest("GET", "http://localhost:8000/users"))
    """

    def __init__(
        self,
        auth_config: AuthConfig | None = None,
        headers: dict[str, str] | None = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ):
        self._auth_config = auth_config
        self._default_headers = dict(headers or {})
        self._timeout_ms = timeout_ms
        self._session: aiohttp.ClientSession | None = None
        self._owns_session = True

    @classmethod
    def from_session(cls, session: aiohttp.ClientSession, **kwargs) -> AiohttpClient:
        """Wrap an existing session. The session is not closed on disconnect."""
        client = cls(**kwargs)
        client._session = session
        client._owns_session = False
        return client

    @property
    def is_connected(self) -> bool:
        return self._session is not None and not self._session.closed

    def _build_headers(self, request: HttpRequest) -> dict[str, str]:
        """Merge default, auth and per-request headers."""
        headers = dict(self._default_headers)
        self._apply_auth_headers(headers)
        headers.update(request.headers)
        return headers

    def _apply_auth_headers(self, headers: dict[str, str]) -> None:
        """Apply authentication headers based on auth config."""
        if self._auth_config is None:
            return

        auth_type = self._auth_config.type.value

        if auth_type == "bearer":
            token = self._auth_config.token
            if token:
                headers["Authorization"] = f"Bearer {token}"
                logger.debug("Applied bearer auth header")

        elif auth_type == "api_key":
            key = self._auth_config.key
            header_name = self._auth_config.header or "X-API-Key"
            if key:
                headers[header_name] = key
                logger.debug(f"Applied API key auth header: {header_name}")

        elif auth_type == "basic":
            username = self._auth_config.username
            password = self._auth_config.password
            if username and password:
                credentials = base64.b64encode(
                    f"{username}:{password}".encode()
                ).decode("ascii")
                headers["Authorization"] = f"Basic {credentials}"
                logger.debug("Applied basic auth header")

    async def connect(self) -> None:
        """Create the HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True

    async def disconnect(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session and self._owns_session:
            await self._session.close()
        self._session = None

    async def send(self, request: HttpRequest) -> HttpResponse:
        """
        Send a request.

        Connects lazily if needed. Network errors and timeouts are
        returned as an HttpResponse with `error` set.
        """
        if not self.is_connected:
            await self.connect()

        timeout_ms = request.timeout_ms or self._timeout_ms
        timeout = aiohttp.ClientTimeout(total=timeout_ms / 1000)
        headers = self._build_headers(request)
        started = time.monotonic()

        logger.debug(f"{request.method} {request.url}")

        try:
            async with self._session.request(
                request.method,
                request.url,
                headers=headers,
                params=request.params or None,
                json=request.json,
                data=request.data,
                timeout=timeout,
            ) as resp:
                body = await resp.read()
                elapsed_ms = (time.monotonic() - started) * 1000
                logger.debug(f"{request.method} {request.url} -> {resp.status} in {elapsed_ms:.0f}ms")
                return HttpResponse(
                    status=resp.status,
                    reason=resp.reason or "",
                    headers=dict(resp.headers),
                    body=body,
                    elapsed_ms=elapsed_ms,
                    request=request,
                )

        except asyncio.TimeoutError:
            return HttpResponse.from_error(
                TransportError.timeout_error(
                    f"Request timed out after {timeout_ms}ms",
                    data={"url": request.url, "method": request.method},
                ),
                request,
            )
        except aiohttp.ClientConnectorError as e:
            return HttpResponse.from_error(
                TransportError.connection_error(
                    f"Connection failed: {e}",
                    data={"url": request.url},
                ),
                request,
            )
        except aiohttp.ClientError as e:
            return HttpResponse.from_error(
                TransportError.protocol_error(
                    f"HTTP error: {e}",
                    data={"url": request.url},
                ),
                request,
            )

    def __repr__(self) -> str:
        status = "connected" if self.is_connected else "disconnected"
        return f"AiohttpClient(status={status}, timeout_ms={self._timeout_ms})"
