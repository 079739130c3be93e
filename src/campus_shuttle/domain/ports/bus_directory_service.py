"""Bus directory service port."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from campus_shuttle.domain.models.bus import Bus


class BusDirectoryService(Protocol):
    """Port for the bus lifecycle operations.

    Field mappings use snake_case keys (`route_name`, `bus_number`,
    `driver_name`, `driver_phone`, `departure_time`, `current_stop`,
    `status`, `end_location`, `stops`). Unknown keys, including any start
    location, are ignored.
    """

    async def create(self, fields: Mapping[str, Any]) -> Bus:
        """Create a bus."""
        ...

    async def update(self, bus_id: str, changes: Mapping[str, Any]) -> Bus:
        """Apply a partial update to a bus."""
        ...

    async def cycle_status(self, bus_id: str) -> Bus:
        """Advance a bus to the next status in the cycle."""
        ...

    async def delete(self, bus_id: str) -> None:
        """Delete a bus and everything that references it."""
        ...

    async def get(self, bus_id: str) -> Bus:
        """Get a single bus."""
        ...

    async def list(self) -> list[Bus]:
        """List all buses ordered by route name."""
        ...
