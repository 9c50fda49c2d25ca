"""
Base client interface for sending HTTP requests.

This module defines the abstract base class that all client
implementations must follow. Expect only depends on this interface;
the concrete client is supplied through Config.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import HttpRequest, HttpResponse


class BaseClient(ABC):
    """
    Abstract base class for HTTP clients.

    A client sends a prepared request and returns either a response or a
    response carrying a TransportError. It never raises for network
    problems.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Acquire resources (sessions, connection pools)."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Release resources."""
        pass

    @abstractmethod
    async def send(self, request: HttpRequest) -> HttpResponse:
        """
        Send a request and wait for the response.

        Args:
            request: The prepared request

        Returns:
            HttpResponse with either status/headers/body or an error
        """
        pass

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Return True if the client is ready to send."""
        pass

    async def __aenter__(self) -> BaseClient:
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.disconnect()
