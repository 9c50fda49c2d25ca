"""
Transport layer models.

This module defines the data structures exchanged with an HTTP client:
the prepared request, the received response, and transport-level errors.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class TransportErrorCode(IntEnum):
    """Transport-level failure categories."""
    CONNECTION_ERROR = 1
    TIMEOUT_ERROR = 2
    PROTOCOL_ERROR = 3
    INTERNAL_ERROR = 4


@dataclass
class TransportError:
    """Represents a request that did not produce an HTTP response."""
    code: TransportErrorCode
    message: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "code": self.code.name.lower(),
            "message": self.message,
        }
        if self.data is not None:
            result["data"] = self.data
        return result

    @classmethod
    def connection_error(cls, message: str, data: Any = None) -> TransportError:
        return cls(TransportErrorCode.CONNECTION_ERROR, message, data)

    @classmethod
    def timeout_error(cls, message: str, data: Any = None) -> TransportError:
        return cls(TransportErrorCode.TIMEOUT_ERROR, message, data)

    @classmethod
    def protocol_error(cls, message: str, data: Any = None) -> TransportError:
        return cls(TransportErrorCode.PROTOCOL_ERROR, message, data)


@dataclass
class HttpRequest:
    """A prepared HTTP request."""
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)
    json: Any = None
    data: bytes | str | None = None
    timeout_ms: int | None = None

    def __post_init__(self):
        self.method = self.method.upper()
        if self.json is not None and self.data is not None:
            raise ValueError("HttpRequest accepts either 'json' or 'data', not both")


@dataclass
class HttpResponse:
    """
    Result of sending an HttpRequest.

    Either an HTTP response (status, headers, body) or a transport error.
    Header names are stored lower-cased.
    """
    status: int = 0
    reason: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    elapsed_ms: float = 0.0
    error: TransportError | None = None
    request: HttpRequest | None = None

    def __post_init__(self):
        self.headers = {k.lower(): v for k, v in self.headers.items()}

    @property
    def success(self) -> bool:
        """True if an HTTP response was received (any status code)."""
        return self.error is None

    @property
    def text(self) -> str:
        try:
            return self.body.decode(self.charset or "utf-8", errors="replace")
        except LookupError:
            # unknown charset in Content-Type
            return self.body.decode("utf-8", errors="replace")

    @property
    def content_type(self) -> str:
        """Media type without parameters, lower-cased."""
        return self.headers.get("content-type", "").split(";")[0].strip().lower()

    @property
    def charset(self) -> str | None:
        for param in self.headers.get("content-type", "").split(";")[1:]:
            name, _, value = param.strip().partition("=")
            if name.lower() == "charset":
                return value.strip().strip('"').lower()
        return None

    def json(self) -> Any:
        """
        Decode the body as JSON.

        Raises:
            json.JSONDecodeError: If the body is not valid JSON
        """
        return json.loads(self.text)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        if self.success:
            return {
                "success": True,
                "status": self.status,
                "headers": self.headers,
                "elapsed_ms": self.elapsed_ms,
            }
        return {
            "success": False,
            "error": self.error.to_dict() if self.error else None,
        }

    @classmethod
    def from_error(cls, error: TransportError, request: HttpRequest | None = None) -> HttpResponse:
        """Create a response from a transport-level error."""
        return cls(error=error, request=request)
