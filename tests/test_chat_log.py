"""Tests for the per-bus chat log."""

import pytest

from campus_shuttle.application.services import BusDirectory, ChatLog
from campus_shuttle.domain.errors import NotFoundError, ValidationError
from conftest import bus_fields


@pytest.mark.asyncio
async def test_window_is_newest_hundred_oldest_first(
    chat_log: ChatLog, bus_directory: BusDirectory
) -> None:
    """Given 105 messages, when listing, then the newest 100 come back oldest first."""
    bus = await bus_directory.create(bus_fields())
    for i in range(105):
        await chat_log.append(bus.id, "student-1", f"message {i}")

    messages = await chat_log.list_for_bus(bus.id)

    assert len(messages) == 100
    assert [m.message.message for m in messages] == [f"message {i}" for i in range(5, 105)]


@pytest.mark.asyncio
async def test_append_populates_sender(chat_log: ChatLog, bus_directory: BusDirectory) -> None:
    """Given a student, when posting, then the message is trimmed and carries the sender."""
    bus = await bus_directory.create(bus_fields())

    details = await chat_log.append(bus.id, "student-2", "  Running late  ")

    assert details.message.message == "Running late"
    assert details.sender is not None
    assert details.sender.name == "Bilal Ahmed"
    assert details.sender.email == "bilal@example.edu"


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
async def test_empty_message_is_rejected(
    chat_log: ChatLog, bus_directory: BusDirectory, text: str
) -> None:
    """Given blank text, when posting, then EMPTY_MESSAGE is raised and nothing is stored."""
    bus = await bus_directory.create(bus_fields())

    with pytest.raises(ValidationError) as exc_info:
        await chat_log.append(bus.id, "student-1", text)

    assert exc_info.value.code == "EMPTY_MESSAGE"
    assert await chat_log.list_for_bus(bus.id) == []


@pytest.mark.asyncio
async def test_posting_to_unknown_bus_is_not_found(chat_log: ChatLog) -> None:
    """Given an unknown bus, when posting, then BUS_NOT_FOUND is raised."""
    with pytest.raises(NotFoundError) as exc_info:
        await chat_log.append("missing", "student-1", "Hello")

    assert exc_info.value.code == "BUS_NOT_FOUND"


@pytest.mark.asyncio
async def test_chats_are_separated_per_bus(chat_log: ChatLog, bus_directory: BusDirectory) -> None:
    """Given two buses, when posting to one, then the other chat stays empty."""
    first = await bus_directory.create(bus_fields())
    second = await bus_directory.create(bus_fields(bus_number="LEA-5678"))

    await chat_log.append(first.id, "student-1", "Hello")

    assert len(await chat_log.list_for_bus(first.id)) == 1
    assert await chat_log.list_for_bus(second.id) == []
