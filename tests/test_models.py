"""Tests for domain models and errors."""

from __future__ import annotations

import dataclasses

import pytest

from telesto.domain.errors import InvalidFieldError, TelestoError, TransportError
from telesto.domain.models import (
    Avoidance,
    Coordinate,
    Mode,
    RequestFailure,
    RequestOutcome,
    RouteRequest,
    TrafficModel,
)


class TestCoordinate:
    def test_renders_six_decimals(self):
        assert str(Coordinate(-37.8201889, 145.1499544)) == "-37.820189,145.149954"

    @pytest.mark.parametrize(
        "lat, lon", [(90.01, 0), (-90.01, 0), (0, 180.01), (0, -180.01), (float("nan"), 0)]
    )
    def test_out_of_range(self, lat, lon):
        with pytest.raises(ValueError):
            Coordinate(lat, lon)

    def test_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Coordinate(0, 0).lat = 1


def test_query_string_parameter_order():
    request = RouteRequest(
        id="1",
        origin=Coordinate(0, 0),
        destination=Coordinate(1, 1),
        departure_time=1565820000,
        mode=Mode.DRIVING,
        avoidances=(Avoidance.HIGHWAYS, Avoidance.INDOORS),
        traffic_model=TrafficModel.OPTIMISTIC,
    )
    assert request.query_string() == (
        "origin=0.000000,0.000000&destination=1.000000,1.000000"
        "&departure_time=1565820000&mode=driving&avoid=highways|indoors"
        "&traffic_model=optimistic"
    )


def test_outcome_constructors():
    ok = RequestOutcome.succeeded("a", "{}")
    failed = RequestOutcome.failed("b", RequestFailure("network", "refused"))

    assert ok.is_success and ok.payload == "{}"
    assert not failed.is_success and failed.payload is None


class TestErrors:
    def test_str_includes_cause(self):
        error = TelestoError("outer", cause=ValueError("inner"))
        assert str(error) == "outer: inner"
        assert error.summary == "outer"

    def test_input_error_location(self):
        error = InvalidFieldError("bad", line=3, field_name="origin_lat", value="x")
        assert error.summary == "invalid contents on line 3: bad"

    def test_errors_are_raisable(self):
        with pytest.raises(TelestoError):
            raise TransportError("Request failed", url="https://example.test")
