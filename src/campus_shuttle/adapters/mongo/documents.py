"""Mapping between domain records and MongoDB documents.

Documents use the camelCase field names the mobile clients already know;
references to buses are stored as ObjectIds, references to users as the
roster ids.
"""

from collections.abc import Mapping
from typing import Any

from bson import ObjectId

from campus_shuttle.domain.models import (
    Announcement,
    AnnouncementState,
    Assignment,
    Bus,
    BusStatus,
    ChatMessage,
    GeoPoint,
    Stop,
)

BUS_FIELDS = {
    "route_name": "routeName",
    "bus_number": "busNumber",
    "driver_name": "driverName",
    "driver_phone": "driverPhone",
    "departure_time": "departureTime",
    "current_stop": "currentStop",
    "status": "status",
    "start_location": "startLocation",
    "end_location": "endLocation",
    "stops": "stops",
    "last_updated": "lastUpdated",
}


def to_object_id(value: str) -> ObjectId | None:
    """Parse a record id. Anything that is not a valid ObjectId names no record."""
    if not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def _location_to_document(location: GeoPoint | None) -> dict[str, Any] | None:
    if location is None:
        return None
    return {
        "name": location.name,
        "latitude": location.latitude,
        "longitude": location.longitude,
        "address": location.address,
    }


def _location_from_document(document: Mapping[str, Any] | None) -> GeoPoint | None:
    if not document:
        return None
    return GeoPoint(
        name=document.get("name", ""),
        latitude=float(document["latitude"]),
        longitude=float(document["longitude"]),
        address=document.get("address") or "",
    )


def _stop_to_document(stop: Stop) -> dict[str, Any]:
    return {
        "name": stop.name,
        "latitude": stop.latitude,
        "longitude": stop.longitude,
        "order": stop.order,
        "address": stop.address,
        "arrivalTime": stop.arrival_time,
        "description": stop.description,
    }


def _stop_from_document(document: Mapping[str, Any]) -> Stop:
    return Stop(
        name=document["name"],
        latitude=float(document["latitude"]),
        longitude=float(document["longitude"]),
        order=int(document.get("order", 0)),
        address=document.get("address") or "",
        arrival_time=document.get("arrivalTime") or "",
        description=document.get("description") or "",
    )


def bus_value_to_document(field: str, value: Any) -> Any:
    """Encode one Bus attribute for storage."""
    if field in ("start_location", "end_location"):
        return _location_to_document(value)
    if field == "stops":
        return [_stop_to_document(stop) for stop in value]
    if field == "status":
        return BusStatus(value).value
    return value


def bus_changes_to_document(changes: Mapping[str, Any]) -> dict[str, Any]:
    """Encode a partial Bus update as a `$set` document.

    Raises:
        KeyError: If a change names an attribute that is not stored.
    """
    return {
        BUS_FIELDS[field]: bus_value_to_document(field, value) for field, value in changes.items()
    }


def bus_to_document(bus: Bus) -> dict[str, Any]:
    """Encode a new bus. The id is assigned by the database."""
    return {
        document_field: bus_value_to_document(field, getattr(bus, field))
        for field, document_field in BUS_FIELDS.items()
    }


def bus_from_document(document: Mapping[str, Any]) -> Bus:
    """Decode a stored bus. Legacy documents may lack a start location."""
    end_location = _location_from_document(document.get("endLocation"))
    if end_location is None:
        raise ValueError(f"Bus {document['_id']} has no destination")
    return Bus(
        id=str(document["_id"]),
        route_name=document["routeName"],
        bus_number=document["busNumber"],
        driver_name=document["driverName"],
        driver_phone=document.get("driverPhone"),
        departure_time=document.get("departureTime"),
        current_stop=document.get("currentStop"),
        status=BusStatus(document.get("status", BusStatus.ON_TIME.value)),
        start_location=_location_from_document(document.get("startLocation")),
        end_location=end_location,
        stops=[_stop_from_document(stop) for stop in document.get("stops", [])],
        last_updated=document["lastUpdated"],
    )


def assignment_to_document(assignment: Assignment, bus_id: ObjectId) -> dict[str, Any]:
    return {"user": assignment.user_id, "bus": bus_id, "createdAt": assignment.created_at}


def assignment_from_document(document: Mapping[str, Any]) -> Assignment:
    return Assignment(
        id=str(document["_id"]),
        user_id=document["user"],
        bus_id=str(document["bus"]),
        created_at=document["createdAt"],
    )


def announcement_to_document(announcement: Announcement, bus_id: ObjectId) -> dict[str, Any]:
    return {
        "bus": bus_id,
        "title": announcement.title,
        "message": announcement.message,
        "createdBy": announcement.created_by,
        "isActive": announcement.is_active,
        "createdAt": announcement.created_at,
    }


def announcement_from_document(document: Mapping[str, Any]) -> Announcement:
    return Announcement(
        id=str(document["_id"]),
        bus_id=str(document["bus"]),
        title=document["title"],
        message=document["message"],
        created_by=document["createdBy"],
        created_at=document["createdAt"],
        state=(
            AnnouncementState.ACTIVE
            if document.get("isActive", True)
            else AnnouncementState.INACTIVE
        ),
    )


def message_to_document(message: ChatMessage, bus_id: ObjectId) -> dict[str, Any]:
    return {
        "bus": bus_id,
        "sender": message.sender_id,
        "message": message.message,
        "createdAt": message.created_at,
    }


def message_from_document(document: Mapping[str, Any]) -> ChatMessage:
    return ChatMessage(
        id=str(document["_id"]),
        bus_id=str(document["bus"]),
        sender_id=document["sender"],
        message=document["message"],
        created_at=document["createdAt"],
    )
