"""Chat message domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ChatMessage:
    """A message in a bus group chat. Never edited or deleted individually."""

    id: str
    bus_id: str
    sender_id: str
    message: str
    created_at: datetime
