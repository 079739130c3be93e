"""Tests for the announcement feed."""

import pytest

from campus_shuttle.application.services import AnnouncementFeed, BusDirectory
from campus_shuttle.domain.errors import NotFoundError, ValidationError
from campus_shuttle.domain.models import Bus
from conftest import bus_fields


async def _bus(bus_directory: BusDirectory, number: str = "LEA-1234") -> Bus:
    return await bus_directory.create(bus_fields(bus_number=number, route_name=f"Route {number}"))


@pytest.mark.asyncio
async def test_create_is_active_and_trimmed(
    announcement_feed: AnnouncementFeed, bus_directory: BusDirectory
) -> None:
    """Given title and message with padding, when creating, then an active trimmed announcement exists."""
    bus = await _bus(bus_directory)

    details = await announcement_feed.create(bus.id, "  Late start ", " 15 minutes ", "admin-1")

    assert details.announcement.title == "Late start"
    assert details.announcement.message == "15 minutes"
    assert details.announcement.is_active
    assert details.author is not None and details.author.name == "Transport Office"
    assert details.bus is not None and details.bus.bus_number == "LEA-1234"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("bus_id", "title", "message"),
    [("", "Title", "Message"), ("bus", "   ", "Message"), ("bus", "Title", "")],
)
async def test_create_requires_all_fields(
    announcement_feed: AnnouncementFeed, bus_id: str, title: str, message: str
) -> None:
    """Given an empty required field, when creating, then MISSING_FIELDS is raised."""
    with pytest.raises(ValidationError) as exc_info:
        await announcement_feed.create(bus_id, title, message, "admin-1")

    assert exc_info.value.code == "MISSING_FIELDS"


@pytest.mark.asyncio
async def test_create_for_unknown_bus_is_not_found(announcement_feed: AnnouncementFeed) -> None:
    """Given an unknown bus, when creating an announcement, then BUS_NOT_FOUND is raised."""
    with pytest.raises(NotFoundError) as exc_info:
        await announcement_feed.create("missing", "Title", "Message", "admin-1")

    assert exc_info.value.code == "BUS_NOT_FOUND"


@pytest.mark.asyncio
async def test_inactive_announcements_are_scoped_to_audit(
    announcement_feed: AnnouncementFeed, bus_directory: BusDirectory
) -> None:
    """Given one active and one inactive announcement, when listing, then only the audit shows both."""
    bus = await _bus(bus_directory)
    other_bus = await _bus(bus_directory, "LEA-5678")
    active = await announcement_feed.create(bus.id, "Active", "Visible", "admin-1")
    hidden = await announcement_feed.create(bus.id, "Hidden", "Not visible", "admin-1")
    await announcement_feed.update(hidden.announcement.id, is_active=False)
    other = await announcement_feed.create(other_bus.id, "Other", "Other bus", "admin-1")

    for_bus = await announcement_feed.list_for_bus(bus.id)
    audit = await announcement_feed.list_for_bus_audit(bus.id)
    global_feed = await announcement_feed.list_global_active()

    assert [d.announcement.id for d in for_bus] == [active.announcement.id]
    assert {d.announcement.id for d in audit} == {active.announcement.id, hidden.announcement.id}
    assert [d.announcement.id for d in global_feed] == [
        other.announcement.id,
        active.announcement.id,
    ]


@pytest.mark.asyncio
async def test_feeds_are_capped_newest_first(
    announcement_feed: AnnouncementFeed, bus_directory: BusDirectory
) -> None:
    """Given many announcements, when listing, then caps of 10 per bus and 20 globally apply."""
    first = await _bus(bus_directory)
    second = await _bus(bus_directory, "LEA-5678")
    for i in range(15):
        await announcement_feed.create(first.id, f"First {i}", "msg", "admin-1")
        await announcement_feed.create(second.id, f"Second {i}", "msg", "admin-1")

    for_bus = await announcement_feed.list_for_bus(first.id)
    global_feed = await announcement_feed.list_global_active()
    audit = await announcement_feed.list_for_bus_audit(first.id)

    assert [d.announcement.title for d in for_bus] == [f"First {i}" for i in range(14, 4, -1)]
    assert len(global_feed) == 20
    assert global_feed[0].announcement.title == "Second 14"
    assert global_feed[1].announcement.title == "First 14"
    assert len(audit) == 15


@pytest.mark.asyncio
async def test_update_trims_and_reactivates(
    announcement_feed: AnnouncementFeed, bus_directory: BusDirectory
) -> None:
    """Given an inactive announcement, when editing and reactivating, then changes apply."""
    bus = await _bus(bus_directory)
    created = await announcement_feed.create(bus.id, "Title", "Message", "admin-1")
    await announcement_feed.update(created.announcement.id, is_active=False)

    updated = await announcement_feed.update(
        created.announcement.id, title=" New title ", is_active=True
    )

    assert updated.announcement.title == "New title"
    assert updated.announcement.message == "Message"
    assert updated.announcement.is_active
    assert updated.announcement.created_at == created.announcement.created_at


@pytest.mark.asyncio
async def test_update_rejects_blank_text(
    announcement_feed: AnnouncementFeed, bus_directory: BusDirectory
) -> None:
    """Given a blank message, when updating, then it fails and the text is unchanged."""
    bus = await _bus(bus_directory)
    created = await announcement_feed.create(bus.id, "Title", "Message", "admin-1")

    with pytest.raises(ValidationError):
        await announcement_feed.update(created.announcement.id, message="   ")

    (audit,) = await announcement_feed.list_for_bus_audit(bus.id)
    assert audit.announcement.message == "Message"


@pytest.mark.asyncio
async def test_update_and_delete_unknown_are_not_found(announcement_feed: AnnouncementFeed) -> None:
    """Given an unknown announcement id, when updating or deleting, then NotFoundError is raised."""
    with pytest.raises(NotFoundError):
        await announcement_feed.update("missing", title="x")
    with pytest.raises(NotFoundError):
        await announcement_feed.delete("missing")


@pytest.mark.asyncio
async def test_delete_is_hard(announcement_feed: AnnouncementFeed, bus_directory: BusDirectory) -> None:
    """Given an announcement, when deleting it, then even the audit view no longer has it."""
    bus = await _bus(bus_directory)
    created = await announcement_feed.create(bus.id, "Title", "Message", "admin-1")

    await announcement_feed.delete(created.announcement.id)

    assert await announcement_feed.list_for_bus_audit(bus.id) == []


@pytest.mark.asyncio
async def test_unknown_bus_reads_are_empty(announcement_feed: AnnouncementFeed) -> None:
    """Given an unknown bus, when reading its feeds, then they are empty."""
    assert await announcement_feed.list_for_bus("missing") == []
    assert await announcement_feed.list_for_bus_audit("missing") == []
