"""Domain models for the campus shuttle fleet."""

from campus_shuttle.domain.models.announcement import Announcement, AnnouncementState
from campus_shuttle.domain.models.assignment import Assignment
from campus_shuttle.domain.models.bus import Bus, BusStatus
from campus_shuttle.domain.models.chat_message import ChatMessage
from campus_shuttle.domain.models.geo_point import GeoPoint
from campus_shuttle.domain.models.route_endpoints import RouteEndpoints
from campus_shuttle.domain.models.stop import Stop
from campus_shuttle.domain.models.summaries import (
    AnnouncementDetails,
    AssignmentDetails,
    AssignmentUpsert,
    BusSummary,
    ChatMessageDetails,
    UserSummary,
)
from campus_shuttle.domain.models.user import Identity, User, UserRole

__all__ = [
    "Announcement",
    "AnnouncementDetails",
    "AnnouncementState",
    "Assignment",
    "AssignmentDetails",
    "AssignmentUpsert",
    "Bus",
    "BusStatus",
    "BusSummary",
    "ChatMessage",
    "ChatMessageDetails",
    "GeoPoint",
    "Identity",
    "RouteEndpoints",
    "Stop",
    "User",
    "UserRole",
    "UserSummary",
]
