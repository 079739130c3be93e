"""Bus directory: lifecycle of the bus aggregate."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from campus_shuttle.application.services.geo_location_validator import clean_text
from campus_shuttle.application.services.route_builder import RouteBuilder, sort_stops
from campus_shuttle.domain.errors import (
    ConflictError,
    NotFoundError,
    UniqueConstraintViolation,
    ValidationError,
)
from campus_shuttle.domain.models import Bus, BusStatus

if TYPE_CHECKING:
    from campus_shuttle.domain.contracts import Clock
    from campus_shuttle.domain.ports import BusRepository

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = {
    "route_name": "Route name",
    "bus_number": "Bus number",
    "driver_name": "Driver name",
}
OPTIONAL_TEXT_FIELDS = ("driver_phone", "departure_time", "current_stop")

# Each attempt either lands the write or observes a concurrent status change.
MAX_STATUS_ATTEMPTS = 3


def _optional_text(value: Any) -> str | None:
    return clean_text(value) or None


def _status_key(value: str) -> str:
    return "".join(ch for ch in value.lower() if ch.isalnum())


def parse_status(value: Any, default: BusStatus) -> BusStatus:
    """Parse a status from its wire value ("On Time") or name ("OnTime", "ON_TIME").

    Raises:
        ValidationError: If the value names no known status.
    """
    if value is None:
        return default
    if isinstance(value, BusStatus):
        return value
    if isinstance(value, str):
        key = _status_key(value)
        for status in BusStatus:
            if key in (_status_key(status.value), _status_key(status.name)):
                return status
    raise ValidationError(
        f"Status must be one of: {', '.join(s.value for s in BusStatus)}", "INVALID_STATUS"
    )


class BusDirectory:
    """Creates, updates, deletes and lists buses.

    Every write validates its input completely before touching the store, so
    a rejected request never leaves a partially updated record behind.
    """

    def __init__(
        self,
        bus_repository: "BusRepository",
        route_builder: RouteBuilder,
        clock: "Clock",
    ) -> None:
        self._buses = bus_repository
        self._route_builder = route_builder
        self._clock = clock

    async def create(self, fields: Mapping[str, Any]) -> Bus:
        """Create a bus from snake_case fields.

        Raises:
            ValidationError: Missing required text, invalid destination or status.
            ConflictError: The bus number is already in use.
        """
        required = {key: clean_text(fields.get(key)) for key in REQUIRED_TEXT_FIELDS}
        if not all(required.values()):
            raise ValidationError(
                "Route name, bus number and driver name are required", "MISSING_FIELDS"
            )

        endpoints = self._route_builder.build_route(fields.get("end_location"))
        bus = Bus(
            id="",
            route_name=required["route_name"],
            bus_number=required["bus_number"],
            driver_name=required["driver_name"],
            driver_phone=_optional_text(fields.get("driver_phone")),
            departure_time=_optional_text(fields.get("departure_time")),
            current_stop=_optional_text(fields.get("current_stop")),
            status=parse_status(fields.get("status"), BusStatus.ON_TIME),
            start_location=endpoints.start_location,
            end_location=endpoints.end_location,
            stops=self._route_builder.build_stops(fields.get("stops")),
            last_updated=self._clock.now(),
        )

        try:
            created = await self._buses.insert_bus(bus)
        except UniqueConstraintViolation:
            logger.warning(f"Rejected bus create: bus number '{bus.bus_number}' already exists")
            raise ConflictError("Bus number already exists", "DUPLICATE_BUS_NUMBER") from None

        logger.info(f"Created bus {created.id} ({created.bus_number}, route '{created.route_name}')")
        return self._present(created)

    async def update(self, bus_id: str, changes: Mapping[str, Any]) -> Bus:
        """Apply a partial update.

        A destination in `changes` replaces the stored one as a whole; `stops`
        replaces the whole stop list. The start is re-asserted to the campus
        origin on every update. Only the fields named in `changes` are
        written, so concurrent updates of different fields all survive.

        Raises:
            NotFoundError: No such bus.
            ValidationError: Blank required text, invalid destination or status.
            ConflictError: The new bus number is already in use.
        """
        existing = await self._require(bus_id)
        updates: dict[str, Any] = {}

        for key, label in REQUIRED_TEXT_FIELDS.items():
            if key in changes:
                value = clean_text(changes[key])
                if not value:
                    raise ValidationError(f"{label} cannot be empty", "MISSING_FIELDS")
                updates[key] = value

        for key in OPTIONAL_TEXT_FIELDS:
            if key in changes:
                updates[key] = _optional_text(changes[key])

        # A null status or destination keeps the stored value
        if changes.get("status") is not None:
            updates["status"] = parse_status(changes["status"], existing.status)

        if changes.get("end_location") is not None:
            endpoints = self._route_builder.build_route(
                changes["end_location"], existing.end_location
            )
            updates["end_location"] = endpoints.end_location
        updates["start_location"] = self._route_builder.campus_location()

        if "stops" in changes:
            updates["stops"] = self._route_builder.build_stops(changes["stops"])

        updates["last_updated"] = self._clock.now()
        updated = await self._write(bus_id, updates)
        if updated is None:
            raise NotFoundError("Bus not found", "BUS_NOT_FOUND")
        logger.info(f"Updated bus {updated.id} ({', '.join(sorted(updates))})")
        return self._present(updated)

    async def cycle_status(self, bus_id: str) -> Bus:
        """Move a bus to the next status: On Time -> Delayed -> Cancelled -> On Time.

        The write only lands while the status is still the one it was read as;
        a concurrent status change makes it re-read and try again.

        Raises:
            NotFoundError: No such bus.
            ConflictError: The status kept changing under us.
        """
        for attempt in range(1, MAX_STATUS_ATTEMPTS + 1):
            existing = await self._require(bus_id)
            updated = await self._write(
                bus_id,
                {
                    "status": existing.status.next(),
                    "start_location": self._route_builder.campus_location(),
                    "last_updated": self._clock.now(),
                },
                expected_status=existing.status,
            )
            if updated is not None:
                logger.info(
                    f"Bus {updated.id} status {existing.status.value} -> {updated.status.value}"
                )
                return self._present(updated)
            logger.info(
                f"Status of bus {bus_id} changed concurrently (attempt {attempt}), retrying"
            )

        logger.warning(
            f"Giving up cycling status of bus {bus_id} after {MAX_STATUS_ATTEMPTS} attempts"
        )
        raise ConflictError("Bus status changed concurrently, please retry", "STATUS_CONFLICT")

    async def delete(self, bus_id: str) -> None:
        """Delete a bus together with its stops, assignments, announcements and chat."""
        deleted = await self._buses.delete_bus(bus_id)
        if deleted is None:
            raise NotFoundError("Bus not found", "BUS_NOT_FOUND")
        logger.info(f"Deleted bus {deleted.id} ({deleted.bus_number})")

    async def get(self, bus_id: str) -> Bus:
        """Get a single bus."""
        return self._present(await self._require(bus_id))

    async def list(self) -> list[Bus]:
        """List all buses ordered by route name."""
        buses = await self._buses.list_buses()
        logger.debug(f"Listing {len(buses)} buses")
        return [self._present(bus) for bus in sorted(buses, key=lambda b: b.route_name)]

    async def _require(self, bus_id: str) -> Bus:
        bus = await self._buses.get_bus(bus_id)
        if bus is None:
            raise NotFoundError("Bus not found", "BUS_NOT_FOUND")
        return bus

    async def _write(
        self,
        bus_id: str,
        updates: Mapping[str, Any],
        expected_status: BusStatus | None = None,
    ) -> Bus | None:
        try:
            return await self._buses.update_bus(bus_id, updates, expected_status)
        except UniqueConstraintViolation:
            logger.warning(
                f"Rejected bus update: bus number '{updates.get('bus_number')}' already exists"
            )
            raise ConflictError("Bus number already exists", "DUPLICATE_BUS_NUMBER") from None

    def _present(self, bus: Bus) -> Bus:
        """Serialization step: start location always present, stops in route order."""
        start_location = bus.start_location
        campus = self._route_builder.campus_location()
        if start_location is None:
            start_location = campus
        elif not start_location.name:
            start_location = replace(start_location, name=campus.name)
        return replace(bus, start_location=start_location, stops=sort_stops(bus.stops))
