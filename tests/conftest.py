"""Shared fixtures for the Telesto test suite."""

from __future__ import annotations

import os
import threading
from typing import Callable, Dict, List, Optional

import pytest

from telesto.config import reset_config
from telesto.ports.transport import TransportResponse

HEADER = (
    "id,origin_lat,origin_lon,destination_lat,destination_lon,"
    "departure_time,mode,avoidances,traffic_model"
)

# Reference instant for departure time normalization (2018-09-15 05:58:31 UTC).
NOW = 1536991111

PRIVATE_KEY = "vNIXE0xscrmjlyV-12Nj_BvUPaw="


class FakeTransport:
    """Thread-safe in-memory transport.

    Responses are produced by a handler called with the requested URL.
    Every call is recorded, and the peak number of calls in flight is
    tracked so tests can check the concurrency bound.
    """

    def __init__(
        self,
        handler: Optional[Callable[[str], TransportResponse]] = None,
        delay: float = 0.0,
    ) -> None:
        self.handler = handler or (
            lambda url: TransportResponse(200, '{"routes": [], "status": "OK"}')
        )
        self.delay = delay
        self.calls: List[str] = []
        self.in_flight = 0
        self.peak_in_flight = 0
        self.closed = False
        self._lock = threading.Lock()

    def get(self, url: str) -> TransportResponse:
        with self._lock:
            self.calls.append(url)
            self.in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            if self.delay:
                threading.Event().wait(self.delay)
            return self.handler(url)
        finally:
            with self._lock:
                self.in_flight -= 1

    def close(self) -> None:
        self.closed = True


def make_row(**overrides: str) -> Dict[str, str]:
    """Build a valid raw CSV row, overriding selected fields."""
    row = {
        "id": "1",
        "origin_lat": "-37.820189",
        "origin_lon": "145.149954",
        "destination_lat": "-37.819681",
        "destination_lon": "144.952302",
        "departure_time": "1534284000",
        "mode": "driving",
        "avoidances": "tolls",
        "traffic_model": "best_guess",
    }
    row.update(overrides)
    return row


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep TELESTO_* variables from the host out of every test."""

    for name in list(os.environ):
        if name.startswith("TELESTO_"):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def fake_transport():
    return FakeTransport()
