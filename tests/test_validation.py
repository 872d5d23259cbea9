"""Tests for input batch validation."""

from __future__ import annotations

import pytest

from conftest import NOW, make_row
from telesto.domain.errors import (
    DuplicateIdError,
    InputError,
    InvalidAvoidanceError,
    InvalidFieldError,
    InvalidModeError,
    InvalidTrafficModelError,
    MissingColumnError,
)
from telesto.domain.models import (
    Avoidance,
    Coordinate,
    Mode,
    RouteRequest,
    TrafficModel,
)
from telesto.services.validation import (
    parse_avoidances,
    parse_mode,
    parse_row,
    parse_traffic_model,
    validate_rows,
)


class TestValidateRows:
    def test_valid_driving_row(self):
        (request,) = validate_rows([make_row()], NOW)

        assert request == RouteRequest(
            id="1",
            origin=Coordinate(-37.820189, 145.149954),
            destination=Coordinate(-37.819681, 144.952302),
            departure_time=1537308000,
            mode=Mode.DRIVING,
            avoidances=(Avoidance.TOLLS,),
            traffic_model=TrafficModel.BEST_GUESS,
        )
        assert request.line == 1

    def test_order_is_preserved(self):
        rows = [make_row(id=str(i)) for i in (3, 1, 2)]
        assert [r.id for r in validate_rows(rows, NOW)] == ["3", "1", "2"]

    def test_empty_batch(self):
        assert validate_rows([], NOW) == []

    def test_missing_id_column(self):
        row = make_row()
        row["ids"] = row.pop("id")
        with pytest.raises(MissingColumnError) as exc_info:
            validate_rows([row], NOW)
        assert exc_info.value.column == "id"

    def test_optional_columns_may_be_absent(self):
        row = make_row(mode="walking")
        del row["avoidances"]
        del row["traffic_model"]

        (request,) = validate_rows([row], NOW)

        assert request.avoidances == ()
        assert request.traffic_model is None

    def test_duplicate_id_names_both_lines(self):
        rows = [make_row(id="a"), make_row(id="b"), make_row(id="a")]
        with pytest.raises(DuplicateIdError) as exc_info:
            validate_rows(rows, NOW)

        error = exc_info.value
        assert error.line == 3
        assert error.first_line == 1
        assert error.row_id == "a"

    def test_error_reports_line_and_id(self):
        rows = [make_row(id="a"), make_row(id="b", mode="flying")]
        with pytest.raises(InvalidModeError) as exc_info:
            validate_rows(rows, NOW)

        assert exc_info.value.summary == (
            "invalid contents on line 2, id 'b': unrecognised mode of transport (flying)"
        )

    def test_first_invalid_row_wins(self):
        rows = [make_row(id="a", origin_lat="x"), make_row(id="b", mode="flying")]
        with pytest.raises(InvalidFieldError) as exc_info:
            validate_rows(rows, NOW)
        assert exc_info.value.line == 1


class TestParseRow:
    def test_empty_id_is_rejected(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            parse_row(make_row(id="  "), 1, NOW)
        assert exc_info.value.field_name == "id"

    def test_fields_are_trimmed(self):
        request = parse_row(
            make_row(id=" 7 ", origin_lat=" -37.820189 ", mode=" Driving "), 1, NOW
        )
        assert request.id == "7"
        assert request.origin.lat == -37.820189
        assert request.mode is Mode.DRIVING

    @pytest.mark.parametrize(
        "field_name, value",
        [
            ("origin_lat", "90.5"),
            ("destination_lat", "-91"),
            ("origin_lon", "180.1"),
            ("destination_lon", "-200"),
            ("origin_lat", "nan"),
            ("origin_lon", "inf"),
            ("origin_lat", ""),
            ("destination_lon", "east"),
        ],
    )
    def test_invalid_coordinates(self, field_name, value):
        with pytest.raises(InvalidFieldError) as exc_info:
            parse_row(make_row(**{field_name: value}), 4, NOW)
        assert exc_info.value.field_name == field_name
        assert exc_info.value.line == 4

    def test_boundary_coordinates_are_accepted(self):
        request = parse_row(
            make_row(origin_lat="90", origin_lon="-180", destination_lat="-90"), 1, NOW
        )
        assert request.origin == Coordinate(90.0, -180.0)

    @pytest.mark.parametrize("value", ["", "soon", "1534284000.5", "99999999999999999999"])
    def test_invalid_departure_time(self, value):
        with pytest.raises(InvalidFieldError) as exc_info:
            parse_row(make_row(departure_time=value), 1, NOW)
        assert exc_info.value.field_name == "departure_time"

    def test_future_departure_time_is_kept(self):
        request = parse_row(make_row(departure_time="1565820000"), 1, NOW)
        assert request.departure_time == 1565820000


class TestTokens:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("driving", Mode.DRIVING),
            ("WALKING", Mode.WALKING),
            ("Bicycling", Mode.BICYCLING),
            ("transit", Mode.TRANSIT),
        ],
    )
    def test_modes(self, raw, expected):
        assert parse_mode(raw) is expected

    def test_unknown_mode(self):
        with pytest.raises(InvalidModeError):
            parse_mode("teleport")

    def test_empty_avoidances(self):
        assert parse_avoidances("") == ()
        assert parse_avoidances("   ") == ()

    def test_avoidances_keep_order_and_drop_repeats(self):
        assert parse_avoidances("tolls|Ferries|tolls|highways") == (
            Avoidance.TOLLS,
            Avoidance.FERRIES,
            Avoidance.HIGHWAYS,
        )

    def test_unknown_avoidance(self):
        with pytest.raises(InvalidAvoidanceError) as exc_info:
            parse_avoidances("tolls|potholes")
        assert "potholes" in str(exc_info.value)

    def test_empty_avoidance_token(self):
        with pytest.raises(InvalidAvoidanceError):
            parse_avoidances("tolls||ferries")

    def test_driving_requires_traffic_model(self):
        with pytest.raises(InvalidTrafficModelError):
            parse_traffic_model("", Mode.DRIVING)

    @pytest.mark.parametrize("mode", [Mode.WALKING, Mode.BICYCLING, Mode.TRANSIT])
    def test_other_modes_forbid_traffic_model(self, mode):
        with pytest.raises(InvalidTrafficModelError):
            parse_traffic_model("best_guess", mode)
        assert parse_traffic_model("", mode) is None

    def test_unknown_traffic_model(self):
        with pytest.raises(InvalidTrafficModelError):
            parse_traffic_model("reckless", Mode.DRIVING)

    def test_traffic_model_is_case_insensitive(self):
        assert parse_traffic_model("PESSIMISTIC", Mode.DRIVING) is TrafficModel.PESSIMISTIC

    def test_all_input_errors_share_a_base(self):
        with pytest.raises(InputError):
            parse_mode("")
