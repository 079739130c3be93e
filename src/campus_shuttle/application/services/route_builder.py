"""Route assembly: campus origin, destination and intermediate stops."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from campus_shuttle.application.services.geo_location_validator import (
    GeoLocationValidator,
    clean_text,
)
from campus_shuttle.domain.errors import ValidationError
from campus_shuttle.domain.models import GeoPoint, RouteEndpoints, Stop

if TYPE_CHECKING:
    from campus_shuttle.domain.ports import CampusLocationProvider

logger = logging.getLogger(__name__)

INVALID_ROUTE_LOCATIONS = "INVALID_ROUTE_LOCATIONS"
DEFAULT_DESTINATION_NAME = "Destination"


def _resolve_order(value: Any, index: int) -> int:
    """Use an explicit integer order, otherwise the position in the input list."""
    if isinstance(value, bool):
        return index
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return index


def sort_stops(stops: Iterable[Stop]) -> list[Stop]:
    """Sort stops by `order` ascending. Ties keep their relative order."""
    return sorted(stops, key=lambda stop: stop.order)


class RouteBuilder:
    """Builds the route of a bus in the fixed "campus -> stops -> destination" shape."""

    def __init__(
        self,
        campus_location_provider: "CampusLocationProvider",
        validator: GeoLocationValidator | None = None,
    ) -> None:
        """Initialize with the campus origin provider.

        Args:
            campus_location_provider: Source of the fixed origin of every route.
            validator: Location validator. A default one is created if omitted.
        """
        self._campus_location_provider = campus_location_provider
        self._validator = validator or GeoLocationValidator()

    def campus_location(self) -> GeoPoint:
        """Return the campus origin."""
        return self._campus_location_provider.get_campus_location()

    def build_route(
        self,
        end_location_input: Mapping[str, Any] | None,
        existing_end_location: GeoPoint | None = None,
    ) -> RouteEndpoints:
        """Resolve the endpoints of a route.

        The start is always the campus origin; a caller-supplied start is never
        consulted. When updating, a missing destination input reuses the
        existing destination, and the existing destination's name is the
        fallback label.

        Raises:
            ValidationError: With code INVALID_ROUTE_LOCATIONS if no valid
                destination can be produced.
        """
        candidate: Mapping[str, Any] | None = end_location_input
        if candidate is None and existing_end_location is not None:
            candidate = asdict(existing_end_location)

        fallback_name = DEFAULT_DESTINATION_NAME
        if existing_end_location is not None:
            fallback_name = clean_text(existing_end_location.name) or DEFAULT_DESTINATION_NAME

        try:
            end_location = self._validator.validate(candidate, fallback_name)
        except ValidationError as e:
            raise ValidationError(
                "Destination with valid coordinates is required", INVALID_ROUTE_LOCATIONS
            ) from e

        return RouteEndpoints(start_location=self.campus_location(), end_location=end_location)

    def build_stops(self, stops_input: Any) -> list[Stop]:
        """Build the stop list from caller input.

        Stops without a name or without valid coordinates are dropped rather
        than failing the request. Anything other than a list yields no stops.
        """
        if not isinstance(stops_input, list | tuple):
            return []

        stops: list[Stop] = []
        for index, raw_stop in enumerate(stops_input):
            if not isinstance(raw_stop, Mapping) or not raw_stop.get("name"):
                logger.debug(f"Dropping stop at position {index}: missing name")
                continue
            try:
                point = self._validator.validate(raw_stop, f"Stop {index + 1}")
            except ValidationError:
                logger.debug(f"Dropping stop at position {index}: invalid coordinates")
                continue

            stops.append(
                Stop(
                    name=point.name,
                    latitude=point.latitude,
                    longitude=point.longitude,
                    address=point.address,
                    order=_resolve_order(raw_stop.get("order"), index),
                    arrival_time=clean_text(raw_stop.get("arrivalTime", raw_stop.get("arrival_time"))),
                    description=clean_text(raw_stop.get("description")),
                )
            )
        return stops
