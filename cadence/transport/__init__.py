"""
HTTP Transport Boundary

This package provides the client interface Expect sends requests through,
plus one implementation backed by aiohttp.

Usage:
    from cadence.transport import AiohttpClient, HttpRequest

    async with AiohttpClient() as client:
        response = await client.send(HttpRequest("GET", "http://localhost:8000/health"))

        if response.success:
            print(response.status, response.json())
        else:
            print(response.error)
"""

# Base
from .base import BaseClient

# Implementations
from .http import AiohttpClient

# Models
from .models import (
    HttpRequest,
    HttpResponse,
    TransportError,
    TransportErrorCode,
)

__all__ = [
    # Base
    "BaseClient",
    # Implementations
    "AiohttpClient",
    # Models
    "HttpRequest",
    "HttpResponse",
    "TransportError",
    "TransportErrorCode",
]
