"""Result aggregation.

Collects the unordered outcomes of a dispatch and lays them out in
input order, one entry per input row. Failed calls keep their slot and
carry an error structure shaped like the directions service's own
error responses.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Sequence

from ..domain.errors import AggregationError
from ..domain.models import OutputEntry, RequestFailure, RequestOutcome

logger = logging.getLogger(__name__)

MALFORMED_JSON_RESPONSE: Dict[str, Any] = {
    "error_message": "Malformed JSON received from server.",
    "routes": [],
    "status": "MALFORMED_JSON",
}


def failure_response(failure: RequestFailure) -> Dict[str, Any]:
    """Build the error structure recorded for a failed call."""
    response: Dict[str, Any] = {
        "error_message": failure.message,
        "routes": [],
        "status": "REQUEST_FAILED",
    }
    if failure.status_code is not None:
        response["http_status"] = failure.status_code
    return response


def decode_payload(payload: str) -> Any:
    """Decode a response body, substituting an error structure if it is not JSON."""
    try:
        return json.loads(payload)
    except ValueError:
        return dict(MALFORMED_JSON_RESPONSE)


def to_entry(outcome: RequestOutcome) -> OutputEntry:
    if outcome.failure is not None:
        return OutputEntry(id=outcome.id, response=failure_response(outcome.failure))
    return OutputEntry(id=outcome.id, response=decode_payload(outcome.payload or ""))


def aggregate(
    outcomes: Iterable[RequestOutcome], order: Sequence[str]
) -> List[OutputEntry]:
    """Order outcomes by input position.

    Args:
        outcomes: Exactly one outcome per id in order, in any sequence.
        order: Request ids in input order.

    Returns:
        One OutputEntry per id, in input order.

    Raises:
        AggregationError: If an id has no outcome, several outcomes, or
            an outcome refers to an unknown id.
    """
    by_id: Dict[str, RequestOutcome] = {}
    for outcome in outcomes:
        if outcome.id in by_id:
            raise AggregationError(f"more than one outcome for id {outcome.id!r}")
        by_id[outcome.id] = outcome

    unknown = set(by_id) - set(order)
    if unknown:
        raise AggregationError(f"outcomes for unknown ids: {sorted(unknown)}")

    entries: List[OutputEntry] = []
    for request_id in order:
        outcome = by_id.get(request_id)
        if outcome is None:
            raise AggregationError(f"no outcome for id {request_id!r}")
        entries.append(to_entry(outcome))

    logger.debug("Aggregated outcomes", extra={"entries": len(entries)})
    return entries
