"""
Configuration structures for an Expect session.

Config bundles everything a session needs: the test name used in failure
messages, the HTTP client and base URL used by Expect.send(), and the
assertion pipeline (handler, or formatter + reporter + logger).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING

from ..assertions.formatter import DefaultFormatter
from ..assertions.handler import DefaultAssertionHandler
from ..environment import Environment

if TYPE_CHECKING:
    from ..assertions.formatter import Formatter
    from ..assertions.handler import AssertionHandler
    from ..assertions.reporters import Logger, Reporter
    from ..transport.base import BaseClient

DEFAULT_TIMEOUT_MS = 30000


class ConfigError(ValueError):
    """Raised when a Config cannot be turned into a working session."""


# ─────────────────────────────────────────────────────────────────────────────
# Auth Configuration
# ─────────────────────────────────────────────────────────────────────────────

class AuthType(str, Enum):
    """Supported authentication types for the HTTP client."""
    BEARER = "bearer"
    API_KEY = "api_key"
    BASIC = "basic"


@dataclass
class AuthConfig:
    """
    Authentication applied to every request sent by the default client.

    Supports three auth types:
    - bearer: Uses Authorization: Bearer <token> header
    - api_key: Uses a custom header with the API key
    - basic: Uses Authorization: Basic <base64(user:pass)> header
    """
    type: AuthType
    # For bearer auth
    token: str | None = None
    # For api_key auth
    header: str = "X-API-Key"
    key: str | None = None
    # For basic auth
    username: str | None = None
    password: str | None = None


# ─────────────────────────────────────────────────────────────────────────────
# Session Config
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class Config:
    """
    Settings for an Expect session.

    Either `assertion_handler` or `reporter` must be set. When only a
    reporter is given, with_defaults() builds a DefaultAssertionHandler
    from the formatter, reporter and logger.
    """
    test_name: str = ""
    base_url: str = ""
    client: BaseClient | None = None
    reporter: Reporter | None = None
    formatter: Formatter | None = None
    assertion_handler: AssertionHandler | None = None
    logger: Logger | None = None
    environment: Environment | None = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    auth: AuthConfig | None = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def owns_client(self) -> bool:
        """True if no client was supplied and the default one will be created."""
        return self.client is None

    def with_defaults(self) -> Config:
        """
        Return a copy with every unset component filled in.

        Raises:
            ConfigError: If neither assertion_handler nor reporter is set
        """
        if self.assertion_handler is None and self.reporter is None:
            raise ConfigError("Config: either assertion_handler or reporter must be set")

        formatter = self.formatter or DefaultFormatter()
        handler = self.assertion_handler or DefaultAssertionHandler(
            self.reporter, formatter, self.logger
        )

        return replace(
            self,
            formatter=formatter,
            assertion_handler=handler,
            environment=self.environment if self.environment is not None else Environment(),
            client=self.client or self._default_client(),
        )

    def _default_client(self) -> BaseClient:
        from ..transport.http import AiohttpClient

        return AiohttpClient(
            auth_config=self.auth,
            headers=self.headers,
            timeout_ms=self.timeout_ms,
        )
