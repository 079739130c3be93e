"""Domain layer - core business models, errors and ports."""

from campus_shuttle.domain.models import (
    Announcement,
    Assignment,
    Bus,
    BusStatus,
    ChatMessage,
    GeoPoint,
    Stop,
    User,
)
from campus_shuttle.domain.ports import (
    AnnouncementRepository,
    AssignmentRepository,
    BusRepository,
    CampusLocationProvider,
    ChatRepository,
    UserDirectory,
)

__all__ = [
    "Announcement",
    "AnnouncementRepository",
    "Assignment",
    "AssignmentRepository",
    "Bus",
    "BusRepository",
    "BusStatus",
    "CampusLocationProvider",
    "ChatMessage",
    "ChatRepository",
    "GeoPoint",
    "Stop",
    "User",
    "UserDirectory",
]
