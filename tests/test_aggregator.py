"""Tests for result aggregation."""

from __future__ import annotations

import pytest

from telesto.domain.errors import AggregationError
from telesto.domain.models import OutputEntry, RequestFailure, RequestOutcome
from telesto.services.aggregator import MALFORMED_JSON_RESPONSE, aggregate


def test_entries_follow_input_order():
    outcomes = [
        RequestOutcome.succeeded("c", '{"n": 3}'),
        RequestOutcome.succeeded("a", '{"n": 1}'),
        RequestOutcome.succeeded("b", '{"n": 2}'),
    ]

    entries = aggregate(outcomes, ["a", "b", "c"])

    assert entries == [
        OutputEntry("a", {"n": 1}),
        OutputEntry("b", {"n": 2}),
        OutputEntry("c", {"n": 3}),
    ]


def test_payload_is_kept_verbatim():
    payload = '{"geocoded_waypoints": [], "routes": [{"summary": "M1"}], "status": "OK"}'
    (entry,) = aggregate([RequestOutcome.succeeded("1", payload)], ["1"])
    assert entry.response == {
        "geocoded_waypoints": [],
        "routes": [{"summary": "M1"}],
        "status": "OK",
    }


def test_malformed_payload_is_replaced():
    (entry,) = aggregate([RequestOutcome.succeeded("1", "<html>oops</html>")], ["1"])
    assert entry.response == MALFORMED_JSON_RESPONSE
    assert entry.response is not MALFORMED_JSON_RESPONSE


def test_failure_keeps_its_slot():
    outcomes = [
        RequestOutcome.succeeded("a", "{}"),
        RequestOutcome.failed(
            "b", RequestFailure("http_status", "server responded with HTTP 500", 500)
        ),
        RequestOutcome.failed("c", RequestFailure("timeout", "Request timed out")),
    ]

    entries = aggregate(outcomes, ["a", "b", "c"])

    assert [e.id for e in entries] == ["a", "b", "c"]
    assert entries[1].response == {
        "error_message": "server responded with HTTP 500",
        "routes": [],
        "status": "REQUEST_FAILED",
        "http_status": 500,
    }
    assert "http_status" not in entries[2].response
    assert entries[2].response["status"] == "REQUEST_FAILED"


def test_to_dict():
    assert OutputEntry("1", {"status": "OK"}).to_dict() == {
        "id": "1",
        "response": {"status": "OK"},
    }


@pytest.mark.parametrize(
    "outcome_ids, order",
    [
        (["a"], ["a", "b"]),
        (["a", "b", "x"], ["a", "b"]),
        (["a", "a", "b"], ["a", "b"]),
    ],
)
def test_mismatched_outcomes(outcome_ids, order):
    outcomes = [RequestOutcome.succeeded(i, "{}") for i in outcome_ids]
    with pytest.raises(AggregationError):
        aggregate(outcomes, order)


def test_empty():
    assert aggregate([], []) == []
