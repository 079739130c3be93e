"""JSON serialization of domain models for the HTTP surface."""

from datetime import datetime
from typing import Any

from campus_shuttle.domain.models import (
    AnnouncementDetails,
    AssignmentDetails,
    Bus,
    BusSummary,
    ChatMessageDetails,
    GeoPoint,
    Stop,
    UserSummary,
)


def _iso(value: datetime) -> str:
    return value.isoformat()


def serialize_point(point: GeoPoint | None) -> dict[str, Any] | None:
    if point is None:
        return None
    return {
        "name": point.name,
        "latitude": point.latitude,
        "longitude": point.longitude,
        "address": point.address,
    }


def serialize_stop(stop: Stop) -> dict[str, Any]:
    return {
        "name": stop.name,
        "latitude": stop.latitude,
        "longitude": stop.longitude,
        "address": stop.address,
        "arrivalTime": stop.arrival_time,
        "description": stop.description,
        "order": stop.order,
    }


def serialize_bus(bus: Bus) -> dict[str, Any]:
    return {
        "id": bus.id,
        "routeName": bus.route_name,
        "busNumber": bus.bus_number,
        "driverName": bus.driver_name,
        "driverPhone": bus.driver_phone,
        "departureTime": bus.departure_time,
        "currentStop": bus.current_stop,
        "status": bus.status.value,
        "startsFromCampus": True,
        "startLocation": serialize_point(bus.start_location),
        "endLocation": serialize_point(bus.end_location),
        "stops": [serialize_stop(stop) for stop in bus.stops],
        "lastUpdated": _iso(bus.last_updated),
    }


def _user(summary: UserSummary | None, *fields: str) -> dict[str, Any] | None:
    if summary is None:
        return None
    values = {
        "id": summary.id,
        "name": summary.name,
        "email": summary.email,
        "rollNumber": summary.roll_number,
    }
    return {key: values[key] for key in ("id", *fields)}


def _bus(summary: BusSummary | None, *fields: str) -> dict[str, Any] | None:
    if summary is None:
        return None
    values = {
        "id": summary.id,
        "routeName": summary.route_name,
        "busNumber": summary.bus_number,
        "driverName": summary.driver_name,
        "status": summary.status.value,
    }
    return {key: values[key] for key in ("id", *fields)}


def serialize_assignment(details: AssignmentDetails) -> dict[str, Any]:
    assignment = details.assignment
    return {
        "id": assignment.id,
        "userId": assignment.user_id,
        "busId": assignment.bus_id,
        "user": _user(details.user, "name", "email", "rollNumber"),
        "bus": _bus(details.bus, "routeName", "busNumber", "driverName", "status"),
        "createdAt": _iso(assignment.created_at),
    }


def serialize_announcement(details: AnnouncementDetails) -> dict[str, Any]:
    announcement = details.announcement
    return {
        "id": announcement.id,
        "busId": announcement.bus_id,
        "bus": _bus(details.bus, "routeName", "busNumber"),
        "title": announcement.title,
        "message": announcement.message,
        "createdBy": _user(details.author, "name"),
        "isActive": announcement.is_active,
        "createdAt": _iso(announcement.created_at),
    }


def serialize_chat_message(details: ChatMessageDetails) -> dict[str, Any]:
    message = details.message
    return {
        "id": message.id,
        "busId": message.bus_id,
        "sender": _user(details.sender, "name", "email"),
        "message": message.message,
        "createdAt": _iso(message.created_at),
    }
