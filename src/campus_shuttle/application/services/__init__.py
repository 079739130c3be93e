"""Core services of the campus shuttle fleet."""

from campus_shuttle.application.services.announcement_feed import AnnouncementFeed
from campus_shuttle.application.services.assignment_registry import AssignmentRegistry
from campus_shuttle.application.services.bus_directory import BusDirectory
from campus_shuttle.application.services.chat_log import ChatLog
from campus_shuttle.application.services.geo_location_validator import GeoLocationValidator
from campus_shuttle.application.services.route_builder import RouteBuilder

__all__ = [
    "AnnouncementFeed",
    "AssignmentRegistry",
    "BusDirectory",
    "ChatLog",
    "GeoLocationValidator",
    "RouteBuilder",
]
