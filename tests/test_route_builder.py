"""Tests for route assembly."""

import pytest

from campus_shuttle.application.services import RouteBuilder
from campus_shuttle.application.services.route_builder import sort_stops
from campus_shuttle.domain.errors import ValidationError
from campus_shuttle.domain.models import GeoPoint
from conftest import CAMPUS

DESTINATION = {"name": "Faizabad", "latitude": 33.6626, "longitude": 73.0845}


def test_start_is_always_campus(route_builder: RouteBuilder) -> None:
    """Given any destination, when building a route, then the start is the campus."""
    endpoints = route_builder.build_route(DESTINATION)

    assert endpoints.start_location == CAMPUS
    assert endpoints.end_location.name == "Faizabad"


def test_unnamed_destination_uses_default_label(route_builder: RouteBuilder) -> None:
    """Given a destination without a name, when building, then it is called Destination."""
    endpoints = route_builder.build_route({"latitude": 33.7, "longitude": 73.0})

    assert endpoints.end_location.name == "Destination"


def test_update_uses_existing_name_as_fallback(route_builder: RouteBuilder) -> None:
    """Given an existing destination, when a new unnamed one is supplied, then the old name is kept."""
    existing = GeoPoint(name="Faizabad", latitude=33.6626, longitude=73.0845)

    endpoints = route_builder.build_route({"latitude": 33.7, "longitude": 73.1}, existing)

    assert endpoints.end_location == GeoPoint(name="Faizabad", latitude=33.7, longitude=73.1)


def test_missing_input_reuses_existing_destination(route_builder: RouteBuilder) -> None:
    """Given no destination input on update, when building, then the existing destination is reused."""
    existing = GeoPoint(name="Faizabad", latitude=33.6626, longitude=73.0845, address="Murree Rd")

    endpoints = route_builder.build_route(None, existing)

    assert endpoints.end_location == existing


@pytest.mark.parametrize(
    "end_input",
    [None, {}, {"name": "Nowhere"}, {"name": "Bad", "latitude": "x", "longitude": 73.0}],
)
def test_invalid_destination_fails(route_builder: RouteBuilder, end_input: object) -> None:
    """Given no valid destination, when building a route, then INVALID_ROUTE_LOCATIONS is raised."""
    with pytest.raises(ValidationError) as exc_info:
        route_builder.build_route(end_input)  # type: ignore[arg-type]

    assert exc_info.value.code == "INVALID_ROUTE_LOCATIONS"


def test_stops_default_order_to_position(route_builder: RouteBuilder) -> None:
    """Given stops without an order, when building, then order is the input position."""
    stops = route_builder.build_stops(
        [
            {"name": "Zero Point", "latitude": 33.69, "longitude": 73.05},
            {"name": "Aabpara", "latitude": 33.70, "longitude": 73.08, "order": 7},
            {"name": "G-9", "latitude": 33.68, "longitude": 73.03},
        ]
    )

    assert [(s.name, s.order) for s in stops] == [("Zero Point", 0), ("Aabpara", 7), ("G-9", 2)]


def test_invalid_stops_are_dropped_silently(route_builder: RouteBuilder) -> None:
    """Given stops lacking a name or coordinates, when building, then only valid stops remain."""
    stops = route_builder.build_stops(
        [
            {"name": "", "latitude": 33.69, "longitude": 73.05},
            {"latitude": 33.69, "longitude": 73.05},
            {"name": "No Coordinates"},
            {"name": "Infinite", "latitude": float("inf"), "longitude": 73.0},
            "not a stop",
            {"name": "Kept", "latitude": 33.70, "longitude": 73.08},
        ]
    )

    assert [s.name for s in stops] == ["Kept"]
    assert stops[0].order == 5


def test_whitespace_stop_name_gets_positional_label(route_builder: RouteBuilder) -> None:
    """Given a stop whose name is only whitespace, when building, then it is labelled by position."""
    stops = route_builder.build_stops(
        [
            {"name": "First", "latitude": 33.69, "longitude": 73.05},
            {"name": "   ", "latitude": 33.70, "longitude": 73.08},
        ]
    )

    assert stops[1].name == "Stop 2"


def test_stop_text_fields_are_trimmed(route_builder: RouteBuilder) -> None:
    """Given arrival time and description, when building, then they are kept trimmed."""
    (stop,) = route_builder.build_stops(
        [
            {
                "name": "Aabpara",
                "latitude": 33.70,
                "longitude": 73.08,
                "arrivalTime": " 7:45 AM ",
                "description": " Near the market ",
            }
        ]
    )

    assert stop.arrival_time == "7:45 AM"
    assert stop.description == "Near the market"


@pytest.mark.parametrize("stops_input", [None, "stops", {"name": "x"}])
def test_non_list_stops_yield_empty_list(route_builder: RouteBuilder, stops_input: object) -> None:
    """Given stops that are not a list, when building, then there are no stops."""
    assert route_builder.build_stops(stops_input) == []


def test_sort_stops_is_stable(route_builder: RouteBuilder) -> None:
    """Given stops with equal orders, when sorting, then their relative order is kept."""
    stops = route_builder.build_stops(
        [
            {"name": "B", "latitude": 1, "longitude": 1, "order": 1},
            {"name": "A", "latitude": 1, "longitude": 1, "order": 0},
            {"name": "C", "latitude": 1, "longitude": 1, "order": 1},
        ]
    )

    assert [s.name for s in sort_stops(stops)] == ["A", "B", "C"]
