"""Schema validation for the input batch.

Turns raw CSV rows (column name -> string) into RouteRequest values.
The whole batch is validated before anything is dispatched; the first
problem found aborts the run with a typed InputError that names the
offending line and row id.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Type, TypeVar

from ..domain.errors import (
    DuplicateIdError,
    InvalidAvoidanceError,
    InvalidFieldError,
    InvalidModeError,
    InvalidTrafficModelError,
    MissingColumnError,
)
from ..domain.models import Avoidance, Coordinate, Mode, RouteRequest, TrafficModel
from .departure import Instant, normalize_departure_time

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = (
    "id",
    "origin_lat",
    "origin_lon",
    "destination_lat",
    "destination_lon",
    "departure_time",
    "mode",
)
OPTIONAL_COLUMNS = ("avoidances", "traffic_model")

LAT_BOUNDS = (-90.0, 90.0)
LON_BOUNDS = (-180.0, 180.0)

E = TypeVar("E", bound=Enum)


def _field(row: Mapping[str, Optional[str]], name: str) -> str:
    return (row.get(name) or "").strip()


def _parse_float(
    row: Mapping[str, Optional[str]],
    name: str,
    bounds: Tuple[float, float],
    line: int,
    row_id: str,
) -> float:
    raw = _field(row, name)
    try:
        value = float(raw)
    except ValueError as e:
        raise InvalidFieldError(
            f"float expected for {name}, found {raw!r} instead",
            line=line,
            row_id=row_id,
            field_name=name,
            value=raw,
            cause=e,
        )
    if not math.isfinite(value) or not bounds[0] <= value <= bounds[1]:
        raise InvalidFieldError(
            f"{name} must be between {bounds[0]:g} and {bounds[1]:g}, got {raw}",
            line=line,
            row_id=row_id,
            field_name=name,
            value=raw,
        )
    return value


def _parse_timestamp(
    row: Mapping[str, Optional[str]], line: int, row_id: str
) -> int:
    raw = _field(row, "departure_time")
    try:
        value = int(raw)
    except ValueError as e:
        raise InvalidFieldError(
            f"integer expected for departure_time, found {raw!r} instead",
            line=line,
            row_id=row_id,
            field_name="departure_time",
            value=raw,
            cause=e,
        )
    try:
        # Reject timestamps that do not map to a calendar instant.
        datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidFieldError(
            f"invalid UNIX timestamp supplied ({raw})",
            line=line,
            row_id=row_id,
            field_name="departure_time",
            value=raw,
            cause=e,
        )
    return value


def _lookup(enum_type: Type[E], token: str) -> Optional[E]:
    try:
        return enum_type(token.lower())
    except ValueError:
        return None


def parse_mode(raw: str, line: Optional[int] = None, row_id: Optional[str] = None) -> Mode:
    """Parse a mode of transport token."""
    mode = _lookup(Mode, raw.strip())
    if mode is None:
        raise InvalidModeError(
            f"unrecognised mode of transport ({raw})",
            line=line,
            row_id=row_id,
            value=raw,
        )
    return mode


def parse_avoidances(
    raw: str, line: Optional[int] = None, row_id: Optional[str] = None
) -> Tuple[Avoidance, ...]:
    """Parse a pipe-separated avoidance list.

    An empty string yields no avoidances. Repeated tokens are collapsed,
    first occurrence wins.
    """
    raw = raw.strip()
    if not raw:
        return ()

    seen: List[Avoidance] = []
    for token in raw.split("|"):
        avoidance = _lookup(Avoidance, token.strip())
        if avoidance is None:
            raise InvalidAvoidanceError(
                f"unrecognised avoidance type ({token.strip()})",
                line=line,
                row_id=row_id,
                value=token,
            )
        if avoidance not in seen:
            seen.append(avoidance)
    return tuple(seen)


def parse_traffic_model(
    raw: str,
    mode: Mode,
    line: Optional[int] = None,
    row_id: Optional[str] = None,
) -> Optional[TrafficModel]:
    """Parse the traffic model and check it against the mode.

    Driving requires a traffic model; every other mode forbids one.
    """
    raw = raw.strip()
    if mode is not Mode.DRIVING:
        if raw:
            raise InvalidTrafficModelError(
                f"traffic model must be empty when mode is {mode.value}, found {raw!r}",
                line=line,
                row_id=row_id,
                value=raw,
            )
        return None

    if not raw:
        raise InvalidTrafficModelError(
            "traffic model not supplied, this must be provided when driving is selected",
            line=line,
            row_id=row_id,
        )
    model = _lookup(TrafficModel, raw)
    if model is None:
        raise InvalidTrafficModelError(
            f"unrecognised traffic model ({raw})",
            line=line,
            row_id=row_id,
            value=raw,
        )
    return model


def check_columns(columns: Iterable[str]) -> None:
    """Fail if any required column is missing from the header.

    Raises:
        MissingColumnError: For the first missing column.
    """
    present = {column.strip() for column in columns if column is not None}
    for column in REQUIRED_COLUMNS:
        if column not in present:
            raise MissingColumnError(
                f"missing required column {column!r}", column=column
            )


def parse_row(row: Mapping[str, Optional[str]], line: int, now: Instant) -> RouteRequest:
    """Validate a single row and build its RouteRequest.

    Args:
        row: Column name to raw string value.
        line: 1-based data line number, for error messages.
        now: Reference instant for departure time normalization.
    """
    row_id = _field(row, "id")
    if not row_id:
        raise InvalidFieldError(
            "id must not be empty", line=line, field_name="id", value=""
        )

    origin = Coordinate(
        _parse_float(row, "origin_lat", LAT_BOUNDS, line, row_id),
        _parse_float(row, "origin_lon", LON_BOUNDS, line, row_id),
    )
    destination = Coordinate(
        _parse_float(row, "destination_lat", LAT_BOUNDS, line, row_id),
        _parse_float(row, "destination_lon", LON_BOUNDS, line, row_id),
    )
    departure_time = normalize_departure_time(_parse_timestamp(row, line, row_id), now)
    mode = parse_mode(_field(row, "mode"), line, row_id)
    avoidances = parse_avoidances(_field(row, "avoidances"), line, row_id)
    traffic_model = parse_traffic_model(_field(row, "traffic_model"), mode, line, row_id)

    return RouteRequest(
        id=row_id,
        origin=origin,
        destination=destination,
        departure_time=departure_time,
        mode=mode,
        avoidances=avoidances,
        traffic_model=traffic_model,
        line=line,
    )


def validate_rows(
    rows: Iterable[Mapping[str, Optional[str]]], now: Instant
) -> List[RouteRequest]:
    """Validate a whole batch of raw rows.

    Args:
        rows: Raw rows in input order.
        now: Reference instant for departure time normalization.

    Returns:
        RouteRequests in input order.

    Raises:
        InputError: On the first invalid row or duplicate id.
    """
    requests: List[RouteRequest] = []
    first_seen: Dict[str, int] = {}

    for line, row in enumerate(rows, start=1):
        if line == 1:
            check_columns(row.keys())
        request = parse_row(row, line, now)
        if request.id in first_seen:
            raise DuplicateIdError(
                f"duplicate id {request.id!r} (first seen on line {first_seen[request.id]})",
                line=line,
                row_id=request.id,
                first_line=first_seen[request.id],
            )
        first_seen[request.id] = line
        requests.append(request)

    logger.info("Validated input batch", extra={"rows": len(requests)})
    return requests
