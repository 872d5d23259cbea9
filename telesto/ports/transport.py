"""Transport port - Abstraction for the HTTP GET used by the dispatcher.

This protocol defines the contract for executing one directions call,
allowing the real HTTP client to be swapped for a fake in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Status code and decoded body of a completed HTTP call."""

    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        """Check if the status is in the 2xx range."""
        return 200 <= self.status_code < 300


class TransportPort(Protocol):
    """Port for the directions HTTP transport.

    Implementation: adapters/transport/requests_transport.py

    Implementations must be safe to call from several worker threads
    at once.
    """

    def get(self, url: str) -> TransportResponse:
        """Issue a GET request for a fully formed URL.

        Args:
            url: The signed request URL.

        Returns:
            The response status and body, whatever the status.

        Raises:
            TransportError: On connection failure or timeout.
        """
        ...

    def close(self) -> None:
        """Release pooled connections."""
        ...
