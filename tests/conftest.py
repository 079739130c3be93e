"""Shared fixtures for the campus shuttle tests."""

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from campus_shuttle.adapters.config import StaticCampusLocationProvider
from campus_shuttle.adapters.memory import InMemoryUserDirectory
from campus_shuttle.application.services import (
    AnnouncementFeed,
    AssignmentRegistry,
    BusDirectory,
    ChatLog,
    RouteBuilder,
)
from campus_shuttle.domain.models import GeoPoint, User, UserRole
from in_memory_fleet_store import InMemoryFleetStore

CAMPUS = GeoPoint(
    name="Test Campus",
    latitude=33.6794,
    longitude=73.1948,
    address="Sector H-8, Islamabad",
)

ADMIN_TOKEN = "admin-token"
STUDENT_TOKEN = "student-token"
OTHER_STUDENT_TOKEN = "other-student-token"


class SteppingClock:
    """Clock that advances one second on every reading, so creation order is unambiguous."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2025, 1, 6, 7, 0, tzinfo=UTC)

    def now(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


def bus_fields(**overrides: Any) -> dict[str, Any]:
    """Valid snake_case create fields for a bus."""
    fields: dict[str, Any] = {
        "route_name": "Route A",
        "bus_number": "LEA-1234",
        "driver_name": "Imran",
        "end_location": {"name": "Faizabad", "latitude": 33.6626, "longitude": 73.0845},
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def campus_provider() -> StaticCampusLocationProvider:
    return StaticCampusLocationProvider(CAMPUS)


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def users() -> InMemoryUserDirectory:
    return InMemoryUserDirectory(
        [
            (User("admin-1", "Transport Office", "transport@example.edu", UserRole.ADMIN), ADMIN_TOKEN),
            (
                User("student-1", "Ayesha Khan", "ayesha@example.edu", UserRole.STUDENT, "FA22-001"),
                STUDENT_TOKEN,
            ),
            (
                User("student-2", "Bilal Ahmed", "bilal@example.edu", UserRole.STUDENT, "FA22-002"),
                OTHER_STUDENT_TOKEN,
            ),
        ]
    )


@pytest.fixture
def store() -> InMemoryFleetStore:
    return InMemoryFleetStore()


@pytest.fixture
def route_builder(campus_provider: StaticCampusLocationProvider) -> RouteBuilder:
    return RouteBuilder(campus_provider)


@pytest.fixture
def bus_directory(
    store: InMemoryFleetStore, route_builder: RouteBuilder, clock: SteppingClock
) -> BusDirectory:
    return BusDirectory(store, route_builder, clock)


@pytest.fixture
def assignment_registry(
    store: InMemoryFleetStore, users: InMemoryUserDirectory, clock: SteppingClock
) -> AssignmentRegistry:
    return AssignmentRegistry(store, store, users, clock)


@pytest.fixture
def announcement_feed(
    store: InMemoryFleetStore, users: InMemoryUserDirectory, clock: SteppingClock
) -> AnnouncementFeed:
    return AnnouncementFeed(store, store, users, clock)


@pytest.fixture
def chat_log(
    store: InMemoryFleetStore, users: InMemoryUserDirectory, clock: SteppingClock
) -> ChatLog:
    return ChatLog(store, users, clock)
