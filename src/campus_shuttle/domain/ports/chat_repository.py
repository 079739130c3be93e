"""Chat repository port."""

from typing import Protocol

from campus_shuttle.domain.models.chat_message import ChatMessage


class ChatRepository(Protocol):
    """Port for the append-only chat log."""

    async def insert_message(self, message: ChatMessage) -> ChatMessage:
        """Append a message. Raises `ReferenceViolation` for an unknown bus."""
        ...

    async def list_recent_messages(self, bus_id: str, limit: int) -> list[ChatMessage]:
        """Return up to `limit` of the most recent messages of a bus, newest first."""
        ...
