"""Route endpoints domain model."""

from dataclasses import dataclass

from .geo_point import GeoPoint


@dataclass(frozen=True)
class RouteEndpoints:
    """Origin and destination of a route. The origin is always the campus."""

    start_location: GeoPoint
    end_location: GeoPoint
