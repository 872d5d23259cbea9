"""Immutable domain models for Telesto.

All models are frozen dataclasses with slots. They carry no behaviour
beyond small invariants and rendering helpers, and have no external
dependencies.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class Mode(Enum):
    """Mode of transport accepted by the directions service."""

    BICYCLING = "bicycling"
    DRIVING = "driving"
    TRANSIT = "transit"
    WALKING = "walking"


class Avoidance(Enum):
    """Route features the directions service can be asked to avoid."""

    FERRIES = "ferries"
    HIGHWAYS = "highways"
    INDOORS = "indoors"
    TOLLS = "tolls"


class TrafficModel(Enum):
    """Traffic assumption used when computing driving durations."""

    BEST_GUESS = "best_guess"
    PESSIMISTIC = "pessimistic"
    OPTIMISTIC = "optimistic"


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not math.isfinite(self.lat) or not -90 <= self.lat <= 90:
            raise ValueError(f"Latitude must be between -90 and 90, got {self.lat}")
        if not math.isfinite(self.lon) or not -180 <= self.lon <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.lon}"
            )

    def __str__(self) -> str:
        return f"{self.lat:.6f},{self.lon:.6f}"


@dataclass(frozen=True, slots=True)
class RouteRequest:
    """One validated input row.

    Attributes:
        id: Caller-supplied identifier, unique within a batch
        origin: Start of the route
        destination: End of the route
        departure_time: Unix timestamp, already shifted to a non-past instant
        mode: Mode of transport
        avoidances: Distinct avoidances in input order
        traffic_model: Required for driving, None for every other mode
        line: 1-based data line the row came from
    """

    id: str
    origin: Coordinate
    destination: Coordinate
    departure_time: int
    mode: Mode
    avoidances: Tuple[Avoidance, ...] = field(default_factory=tuple)
    traffic_model: Optional[TrafficModel] = None
    line: Optional[int] = field(default=None, compare=False)

    def query_string(self) -> str:
        """Render the directions query parameters for this request.

        Parameter order is fixed; signed requests depend on it.
        """
        params = [
            f"origin={self.origin}",
            f"destination={self.destination}",
            f"departure_time={self.departure_time}",
            f"mode={self.mode.value}",
        ]
        if self.avoidances:
            params.append("avoid=" + "|".join(a.value for a in self.avoidances))
        if self.traffic_model is not None:
            params.append(f"traffic_model={self.traffic_model.value}")
        return "&".join(params)


@dataclass(frozen=True, slots=True)
class ApiKey:
    """Standard plan credentials."""

    value: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class ClientSigned:
    """Premium plan credentials; requests are signed with the private key."""

    client_id: str
    private_key: str = field(repr=False)
    channel: Optional[str] = None


Credentials = Union[ApiKey, ClientSigned]


@dataclass(frozen=True, slots=True)
class SignedRequest:
    """A fully formed directions URL tagged with its request id."""

    id: str
    url: str


@dataclass(frozen=True, slots=True)
class RequestFailure:
    """Why a single directions call did not produce a payload.

    Attributes:
        kind: One of "network", "timeout", "http_status"
        message: Human-readable description
        status_code: HTTP status for "http_status" failures
    """

    kind: str
    message: str
    status_code: Optional[int] = None


@dataclass(frozen=True, slots=True)
class RequestOutcome:
    """Result of one directions call: a raw payload or a failure."""

    id: str
    payload: Optional[str] = None
    failure: Optional[RequestFailure] = None

    @classmethod
    def succeeded(cls, request_id: str, payload: str) -> RequestOutcome:
        return cls(id=request_id, payload=payload)

    @classmethod
    def failed(cls, request_id: str, failure: RequestFailure) -> RequestOutcome:
        return cls(id=request_id, failure=failure)

    @property
    def is_success(self) -> bool:
        """Check if the call returned a payload."""
        return self.failure is None


@dataclass(frozen=True, slots=True)
class OutputEntry:
    """One element of the final output collection."""

    id: str
    response: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "response": self.response}
