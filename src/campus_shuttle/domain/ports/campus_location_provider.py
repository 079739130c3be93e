"""Campus location provider port."""

from typing import Protocol

from campus_shuttle.domain.models.geo_point import GeoPoint


class CampusLocationProvider(Protocol):
    """Port for the fixed origin every route starts from."""

    def get_campus_location(self) -> GeoPoint:
        """Return the campus origin."""
        ...
