"""Bus aggregate domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .geo_point import GeoPoint
from .stop import Stop


class BusStatus(str, Enum):
    """Operator-set live status of a bus."""

    ON_TIME = "On Time"
    DELAYED = "Delayed"
    CANCELLED = "Cancelled"

    def next(self) -> "BusStatus":
        """Return the status that follows this one in the round-robin cycle."""
        members = list(BusStatus)
        return members[(members.index(self) + 1) % len(members)]


@dataclass(frozen=True)
class Bus:
    """A shuttle bus with its route and live status.

    Stops are owned by the bus and are always replaced as a whole list.
    `start_location` is None only for legacy records; readers fill it in
    from the campus constant.
    """

    id: str
    route_name: str
    bus_number: str
    driver_name: str
    end_location: GeoPoint
    last_updated: datetime
    start_location: GeoPoint | None = None
    driver_phone: str | None = None
    departure_time: str | None = None
    current_stop: str | None = None
    status: BusStatus = BusStatus.ON_TIME
    stops: list[Stop] = field(default_factory=list)
