"""Ports (interfaces) for the ports-and-adapters architecture."""

from campus_shuttle.domain.ports.announcement_repository import AnnouncementRepository
from campus_shuttle.domain.ports.announcement_service import AnnouncementService
from campus_shuttle.domain.ports.assignment_repository import AssignmentRepository
from campus_shuttle.domain.ports.assignment_service import AssignmentService
from campus_shuttle.domain.ports.bus_directory_service import BusDirectoryService
from campus_shuttle.domain.ports.bus_repository import BusRepository
from campus_shuttle.domain.ports.campus_location_provider import CampusLocationProvider
from campus_shuttle.domain.ports.chat_repository import ChatRepository
from campus_shuttle.domain.ports.chat_service import ChatService
from campus_shuttle.domain.ports.user_directory import UserDirectory

__all__ = [
    "AnnouncementRepository",
    "AnnouncementService",
    "AssignmentRepository",
    "AssignmentService",
    "BusDirectoryService",
    "BusRepository",
    "CampusLocationProvider",
    "ChatRepository",
    "ChatService",
    "UserDirectory",
]
