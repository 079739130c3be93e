"""Populated read models returned by the core operations.

References are stored as ids; these models carry the small summaries of
the referenced user and bus that readers display next to a record. A
summary is None when the referenced entity is no longer known.
"""

from dataclasses import dataclass

from .announcement import Announcement
from .assignment import Assignment
from .bus import BusStatus
from .chat_message import ChatMessage


@dataclass(frozen=True)
class UserSummary:
    """Display fields of a user."""

    id: str
    name: str
    email: str
    roll_number: str | None = None


@dataclass(frozen=True)
class BusSummary:
    """Display fields of a bus."""

    id: str
    route_name: str
    bus_number: str
    driver_name: str
    status: BusStatus


@dataclass(frozen=True)
class AssignmentDetails:
    """An assignment with its user and bus populated."""

    assignment: Assignment
    user: UserSummary | None
    bus: BusSummary | None


@dataclass(frozen=True)
class AssignmentUpsert:
    """Result of an assignment upsert: the post-state and whether a row was created."""

    details: AssignmentDetails
    created: bool


@dataclass(frozen=True)
class AnnouncementDetails:
    """An announcement with its author and bus populated."""

    announcement: Announcement
    author: UserSummary | None
    bus: BusSummary | None


@dataclass(frozen=True)
class ChatMessageDetails:
    """A chat message with its sender populated."""

    message: ChatMessage
    sender: UserSummary | None
