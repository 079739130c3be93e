"""Tests for the assignment registry."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from campus_shuttle.adapters.memory import InMemoryUserDirectory
from campus_shuttle.application.services import AssignmentRegistry, BusDirectory, RouteBuilder
from campus_shuttle.domain.errors import (
    ConflictError,
    NotFoundError,
    UniqueConstraintViolation,
    ValidationError,
)
from campus_shuttle.domain.models import Assignment, Bus
from conftest import SteppingClock, bus_fields
from in_memory_fleet_store import InMemoryFleetStore


class InterleavingFleetStore(InMemoryFleetStore):
    """Yields to the event loop after every assignment lookup, so concurrent upserts interleave."""

    async def find_assignment_by_user(self, user_id: str) -> Assignment | None:
        found = await super().find_assignment_by_user(user_id)
        await asyncio.sleep(0)
        return found


async def _two_buses(bus_directory: BusDirectory) -> tuple[Bus, Bus]:
    first = await bus_directory.create(bus_fields())
    second = await bus_directory.create(bus_fields(route_name="Route B", bus_number="LEA-5678"))
    return first, second


@pytest.mark.asyncio
async def test_unassigned_user_has_no_assignment(assignment_registry: AssignmentRegistry) -> None:
    """Given a user without an assignment, when looking it up, then None is returned."""
    assert await assignment_registry.get_for_user("student-1") is None


@pytest.mark.asyncio
async def test_upsert_creates_populated_assignment(
    assignment_registry: AssignmentRegistry, bus_directory: BusDirectory
) -> None:
    """Given a user and a bus, when upserting, then a populated assignment is created."""
    bus, _ = await _two_buses(bus_directory)

    outcome = await assignment_registry.upsert("student-1", bus.id)

    assert outcome.created is True
    assert outcome.details.assignment.bus_id == bus.id
    assert outcome.details.user is not None
    assert outcome.details.user.name == "Ayesha Khan"
    assert outcome.details.user.roll_number == "FA22-001"
    assert outcome.details.bus is not None
    assert outcome.details.bus.bus_number == "LEA-1234"
    assert outcome.details.bus.driver_name == "Imran"


@pytest.mark.asyncio
async def test_sequential_upserts_repoint_single_row(
    assignment_registry: AssignmentRegistry, bus_directory: BusDirectory, store: InMemoryFleetStore
) -> None:
    """Given an assigned user, when upserting a different bus, then the same row is repointed."""
    first_bus, second_bus = await _two_buses(bus_directory)

    first = await assignment_registry.upsert("student-1", first_bus.id)
    second = await assignment_registry.upsert("student-1", second_bus.id)

    assignments = await store.list_assignments()
    assert len(assignments) == 1
    assert assignments[0].bus_id == second_bus.id
    assert second.created is False
    assert second.details.assignment.id == first.details.assignment.id


@pytest.mark.asyncio
async def test_repeated_upsert_is_idempotent(
    assignment_registry: AssignmentRegistry, bus_directory: BusDirectory, store: InMemoryFleetStore
) -> None:
    """Given an assignment, when upserting the same pair again, then the id is unchanged."""
    bus, _ = await _two_buses(bus_directory)

    first = await assignment_registry.upsert("student-1", bus.id)
    again = await assignment_registry.upsert("student-1", bus.id)

    assert again.details.assignment == first.details.assignment
    assert len(await store.list_assignments()) == 1


@pytest.mark.asyncio
async def test_concurrent_upserts_leave_one_row(
    users: InMemoryUserDirectory, clock: SteppingClock, route_builder: RouteBuilder
) -> None:
    """Given two racing upserts for an unassigned user, when both finish, then one row remains."""
    store = InterleavingFleetStore()
    directory = BusDirectory(store, route_builder, clock)
    registry = AssignmentRegistry(store, store, users, clock)
    first_bus, second_bus = await _two_buses(directory)

    outcomes = await asyncio.gather(
        registry.upsert("student-1", first_bus.id),
        registry.upsert("student-1", second_bus.id),
    )

    assignments = await store.list_assignments()
    assert len(assignments) == 1
    assert sorted(o.created for o in outcomes) == [False, True]
    # The writer that repointed completed last
    last = next(o for o in outcomes if not o.created)
    assert assignments[0].bus_id == last.details.assignment.bus_id == second_bus.id


@pytest.mark.asyncio
async def test_persistent_contention_surfaces_conflict(
    users: InMemoryUserDirectory, clock: SteppingClock
) -> None:
    """Given a store that keeps losing the race, when upserting, then ConflictError is raised."""
    assignments = AsyncMock()
    assignments.find_assignment_by_user.return_value = None
    assignments.insert_assignment.side_effect = UniqueConstraintViolation("user", "student-1")
    buses = AsyncMock()
    registry = AssignmentRegistry(assignments, buses, users, clock)

    with pytest.raises(ConflictError):
        await registry.upsert("student-1", "bus-1")

    assert assignments.insert_assignment.await_count == 3


@pytest.mark.asyncio
async def test_upsert_rejects_unknown_references(
    assignment_registry: AssignmentRegistry, bus_directory: BusDirectory
) -> None:
    """Given a dangling user or bus id, when upserting, then the matching not-found code is raised."""
    bus, _ = await _two_buses(bus_directory)

    with pytest.raises(NotFoundError) as user_error:
        await assignment_registry.upsert("ghost", bus.id)
    with pytest.raises(NotFoundError) as bus_error:
        await assignment_registry.upsert("student-1", "missing-bus")

    assert user_error.value.code == "USER_NOT_FOUND"
    assert bus_error.value.code == "BUS_NOT_FOUND"


@pytest.mark.asyncio
async def test_upsert_requires_ids(assignment_registry: AssignmentRegistry) -> None:
    """Given an empty id, when upserting, then MISSING_FIELDS is raised."""
    with pytest.raises(ValidationError) as exc_info:
        await assignment_registry.upsert("", "bus-1")

    assert exc_info.value.code == "MISSING_FIELDS"


@pytest.mark.asyncio
async def test_list_all_is_newest_first(
    assignment_registry: AssignmentRegistry, bus_directory: BusDirectory
) -> None:
    """Given assignments made in sequence, when listing, then the newest comes first."""
    bus, _ = await _two_buses(bus_directory)
    await assignment_registry.upsert("student-1", bus.id)
    await assignment_registry.upsert("student-2", bus.id)

    listed = await assignment_registry.list_all()

    assert [d.assignment.user_id for d in listed] == ["student-2", "student-1"]


@pytest.mark.asyncio
async def test_remove_deletes_only_the_assignment(
    assignment_registry: AssignmentRegistry, bus_directory: BusDirectory
) -> None:
    """Given an assignment, when removing it, then the bus remains and the user is unassigned."""
    bus, _ = await _two_buses(bus_directory)
    outcome = await assignment_registry.upsert("student-1", bus.id)

    await assignment_registry.remove(outcome.details.assignment.id)

    assert await assignment_registry.get_for_user("student-1") is None
    assert (await bus_directory.get(bus.id)).id == bus.id


@pytest.mark.asyncio
async def test_remove_unknown_assignment_is_not_found(
    assignment_registry: AssignmentRegistry,
) -> None:
    """Given an unknown assignment id, when removing, then NotFoundError is raised."""
    with pytest.raises(NotFoundError) as exc_info:
        await assignment_registry.remove("missing")

    assert exc_info.value.code == "NOT_FOUND"
