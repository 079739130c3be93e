"""Bus repository port."""

from collections.abc import Mapping
from typing import Any, Protocol

from campus_shuttle.domain.models.bus import Bus, BusStatus


class BusRepository(Protocol):
    """Port for persisting buses.

    `bus_number` is unique across all buses; `insert_bus` and `update_bus`
    raise `UniqueConstraintViolation` on a collision. Every method raises
    `DependencyUnavailableError` when the store is unreachable.
    """

    async def insert_bus(self, bus: Bus) -> Bus:
        """Persist a new bus and return it with its assigned id."""
        ...

    async def update_bus(
        self,
        bus_id: str,
        changes: Mapping[str, Any],
        expected_status: BusStatus | None = None,
    ) -> Bus | None:
        """Set the given Bus attributes in one atomic write, leaving the others as stored.

        With `expected_status`, the write only applies while the stored status
        still equals it. Returns the updated bus, or None if the bus does not
        exist or its status no longer matches.
        """
        ...

    async def get_bus(self, bus_id: str) -> Bus | None:
        """Get a bus by id."""
        ...

    async def list_buses(self) -> list[Bus]:
        """List all buses in storage order."""
        ...

    async def delete_bus(self, bus_id: str) -> Bus | None:
        """Delete a bus and every record that references it.

        Returns the deleted bus, or None if it did not exist.
        """
        ...
