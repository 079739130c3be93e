"""Geographic point domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    """A named location with finite coordinates."""

    name: str
    latitude: float
    longitude: float
    address: str = ""
