"""Chat log: append-only group chat per bus."""

import logging
from typing import TYPE_CHECKING

from campus_shuttle.application.services.geo_location_validator import clean_text
from campus_shuttle.application.services.summaries import summarize_user
from campus_shuttle.domain.errors import NotFoundError, ReferenceViolation, ValidationError
from campus_shuttle.domain.models import ChatMessage, ChatMessageDetails

if TYPE_CHECKING:
    from campus_shuttle.domain.contracts import Clock
    from campus_shuttle.domain.ports import ChatRepository, UserDirectory

logger = logging.getLogger(__name__)

CHAT_WINDOW = 100


class ChatLog:
    """Appends messages and serves the most recent window of a bus chat."""

    def __init__(
        self,
        chat_repository: "ChatRepository",
        user_directory: "UserDirectory",
        clock: "Clock",
    ) -> None:
        self._messages = chat_repository
        self._users = user_directory
        self._clock = clock

    async def append(self, bus_id: str, sender_id: str, text: str) -> ChatMessageDetails:
        """Post a message. Any authenticated user may post to any bus chat."""
        text = clean_text(text)
        if not clean_text(bus_id) or not text:
            raise ValidationError("Bus ID and message are required", "EMPTY_MESSAGE")

        try:
            created = await self._messages.insert_message(
                ChatMessage(
                    id="",
                    bus_id=bus_id,
                    sender_id=sender_id,
                    message=text,
                    created_at=self._clock.now(),
                )
            )
        except ReferenceViolation:
            raise NotFoundError("Bus not found", "BUS_NOT_FOUND") from None

        logger.debug(f"Chat message {created.id} posted to bus {bus_id} by {sender_id}")
        return self._describe(created)

    async def list_for_bus(self, bus_id: str) -> list[ChatMessageDetails]:
        """The newest 100 messages of a bus, returned oldest first.

        The window is cut from the newest end before it is put into
        display order.
        """
        newest_first = await self._messages.list_recent_messages(bus_id, CHAT_WINDOW)
        return [self._describe(message) for message in reversed(newest_first)]

    def _describe(self, message: ChatMessage) -> ChatMessageDetails:
        return ChatMessageDetails(
            message=message,
            sender=summarize_user(self._users.get_user(message.sender_id)),
        )
