"""Departure time normalization.

The directions service rejects departure times in the past. A past
departure time is moved forward by whole weeks, which keeps its day of
week and time of day, to the first such instant at or after "now".
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import Union

WEEK_IN_SECONDS = 7 * 24 * 60 * 60

Instant = Union[int, datetime]


def current_timestamp() -> int:
    """Return the current unix time in whole seconds."""
    return int(time.time())


def _to_timestamp(instant: Instant) -> int:
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            raise ValueError("naive datetime has no defined unix timestamp")
        return int(instant.timestamp())
    return int(instant)


def normalize_departure_time(departure_time: int, now: Instant) -> int:
    """Shift a past departure time to the next matching future instant.

    Args:
        departure_time: Unix timestamp from the input row.
        now: Reference instant, as a unix timestamp or an aware datetime.

    Returns:
        departure_time itself if it is not before now, otherwise the
        smallest departure_time + k weeks that is >= now.
    """
    reference = _to_timestamp(now)
    if departure_time >= reference:
        return departure_time

    delta = reference - departure_time
    weeks = -(-delta // WEEK_IN_SECONDS)  # ceiling division
    return departure_time + weeks * WEEK_IN_SECONDS
