"""Chat service port."""

from typing import Protocol

from campus_shuttle.domain.models.summaries import ChatMessageDetails


class ChatService(Protocol):
    """Port for the per-bus group chat."""

    async def append(self, bus_id: str, sender_id: str, text: str) -> ChatMessageDetails:
        """Post a message to a bus chat."""
        ...

    async def list_for_bus(self, bus_id: str) -> list[ChatMessageDetails]:
        """The most recent messages of a bus chat, oldest first."""
        ...
