"""MongoDB fleet store backed by pymongo's asyncio client."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from pymongo import ASCENDING, DESCENDING, AsyncMongoClient, ReturnDocument
from pymongo.errors import ConnectionFailure, DuplicateKeyError

from campus_shuttle.domain.errors import (
    DependencyUnavailableError,
    ReferenceViolation,
    UniqueConstraintViolation,
)
from campus_shuttle.domain.models import Announcement, Assignment, Bus, BusStatus, ChatMessage
from campus_shuttle.domain.ports import (
    AnnouncementRepository,
    AssignmentRepository,
    BusRepository,
    ChatRepository,
)

from .documents import (
    announcement_from_document,
    announcement_to_document,
    assignment_from_document,
    assignment_to_document,
    bus_changes_to_document,
    bus_from_document,
    bus_to_document,
    message_from_document,
    message_to_document,
    to_object_id,
)

if TYPE_CHECKING:
    from bson import ObjectId

    from campus_shuttle.adapters.config import AppConfig

logger = logging.getLogger(__name__)

BUSES = "buses"
ASSIGNMENTS = "assignments"
ANNOUNCEMENTS = "announcements"
CHATS = "chats"

NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]


@contextmanager
def _store_errors() -> Iterator[None]:
    """Report an unreachable server as DependencyUnavailableError."""
    try:
        yield
    except ConnectionFailure as e:
        logger.error(f"MongoDB unreachable: {e}")
        raise DependencyUnavailableError("Database unavailable. Please try again later.") from e


class MongoFleetStore(
    BusRepository, AssignmentRepository, AnnouncementRepository, ChatRepository
):
    """Buses, assignments, announcements and chat messages in MongoDB.

    Unique indexes on `buses.busNumber` and `assignments.user` enforce the
    storage constraints; a duplicate key surfaces as
    `UniqueConstraintViolation`. Writes that reference a bus re-check the
    bus after inserting and undo the insert if it was deleted meanwhile, so
    a record never outlives the cascade of its bus.
    """

    def __init__(self, database: Any) -> None:
        """Initialize the store.

        Args:
            database: An `AsyncDatabase` (or compatible object).
        """
        self._database = database
        self._buses = database.get_collection(BUSES)
        self._assignments = database.get_collection(ASSIGNMENTS)
        self._announcements = database.get_collection(ANNOUNCEMENTS)
        self._chats = database.get_collection(CHATS)

    @classmethod
    def from_config(cls, config: AppConfig) -> MongoFleetStore:
        """Create a store for the configured MongoDB deployment.

        The client connects lazily; nothing is contacted until the first
        operation.
        """
        client: AsyncMongoClient[dict[str, Any]] = AsyncMongoClient(
            config.mongodb_uri,
            tz_aware=True,
            serverSelectionTimeoutMS=config.mongodb_timeout_ms,
        )
        database = client.get_default_database(default=config.mongodb_database)
        logger.info(f"Using MongoDB database '{database.name}'")
        return cls(database)

    async def ensure_indexes(self) -> None:
        """Create the unique and query indexes. Safe to run on every start."""
        with _store_errors():
            await self._buses.create_index([("busNumber", ASCENDING)], unique=True)
            await self._assignments.create_index([("user", ASCENDING)], unique=True)
            await self._assignments.create_index([("bus", ASCENDING)])
            await self._announcements.create_index(
                [("bus", ASCENDING), ("isActive", ASCENDING), ("createdAt", DESCENDING)]
            )
            await self._chats.create_index([("bus", ASCENDING), ("createdAt", DESCENDING)])
        logger.info("MongoDB indexes ensured")

    async def ping(self) -> bool:
        """Whether the server answers."""
        try:
            await self._database.command("ping")
        except ConnectionFailure as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False
        return True

    async def close(self) -> None:
        await self._database.client.close()
        logger.info("MongoDB client closed")

    async def _bus_exists(self, bus_id: ObjectId) -> bool:
        return await self._buses.find_one({"_id": bus_id}, projection={"_id": 1}) is not None

    async def _insert_referencing_bus(
        self, collection: Any, document: dict[str, Any], bus_id: ObjectId
    ) -> Any:
        """Insert a document that references a bus, keeping the reference valid.

        A delete of the bus that races this insert either removes the
        document in its cascade or is observed by the re-check below.
        """
        if not await self._bus_exists(bus_id):
            raise ReferenceViolation("bus", str(bus_id))
        result = await collection.insert_one(document)
        if not await self._bus_exists(bus_id):
            await collection.delete_one({"_id": result.inserted_id})
            raise ReferenceViolation("bus", str(bus_id))
        return result.inserted_id

    # Buses

    async def insert_bus(self, bus: Bus) -> Bus:
        with _store_errors():
            try:
                result = await self._buses.insert_one(bus_to_document(bus))
            except DuplicateKeyError:
                raise UniqueConstraintViolation("bus_number", bus.bus_number) from None
        return replace(bus, id=str(result.inserted_id))

    async def update_bus(
        self,
        bus_id: str,
        changes: Mapping[str, Any],
        expected_status: BusStatus | None = None,
    ) -> Bus | None:
        object_id = to_object_id(bus_id)
        if object_id is None:
            return None
        query: dict[str, Any] = {"_id": object_id}
        if expected_status is not None:
            query["status"] = expected_status.value

        with _store_errors():
            try:
                document = await self._buses.find_one_and_update(
                    query,
                    {"$set": bus_changes_to_document(changes)},
                    return_document=ReturnDocument.AFTER,
                )
            except DuplicateKeyError:
                raise UniqueConstraintViolation(
                    "bus_number", str(changes.get("bus_number"))
                ) from None
        return bus_from_document(document) if document is not None else None

    async def get_bus(self, bus_id: str) -> Bus | None:
        object_id = to_object_id(bus_id)
        if object_id is None:
            return None
        with _store_errors():
            document = await self._buses.find_one({"_id": object_id})
        return bus_from_document(document) if document is not None else None

    async def list_buses(self) -> list[Bus]:
        with _store_errors():
            documents = await self._buses.find().to_list(length=None)
        return [bus_from_document(document) for document in documents]

    async def delete_bus(self, bus_id: str) -> Bus | None:
        object_id = to_object_id(bus_id)
        if object_id is None:
            return None
        with _store_errors():
            document = await self._buses.find_one_and_delete({"_id": object_id})
            if document is None:
                return None
            assignments = await self._assignments.delete_many({"bus": object_id})
            announcements = await self._announcements.delete_many({"bus": object_id})
            messages = await self._chats.delete_many({"bus": object_id})

        logger.debug(
            f"Cascade for bus {bus_id}: {assignments.deleted_count} assignments, "
            f"{announcements.deleted_count} announcements, {messages.deleted_count} messages"
        )
        return bus_from_document(document)

    # Assignments

    async def insert_assignment(self, assignment: Assignment) -> Assignment:
        bus_id = to_object_id(assignment.bus_id)
        if bus_id is None:
            raise ReferenceViolation("bus", assignment.bus_id)
        with _store_errors():
            try:
                inserted_id = await self._insert_referencing_bus(
                    self._assignments, assignment_to_document(assignment, bus_id), bus_id
                )
            except DuplicateKeyError:
                raise UniqueConstraintViolation("user", assignment.user_id) from None
        return replace(assignment, id=str(inserted_id))

    async def repoint_assignment(self, assignment_id: str, bus_id: str) -> Assignment | None:
        object_id = to_object_id(assignment_id)
        if object_id is None:
            return None
        target = to_object_id(bus_id)
        if target is None:
            raise ReferenceViolation("bus", bus_id)
        with _store_errors():
            if not await self._bus_exists(target):
                raise ReferenceViolation("bus", bus_id)
            document = await self._assignments.find_one_and_update(
                {"_id": object_id},
                {"$set": {"bus": target}},
                return_document=ReturnDocument.AFTER,
            )
            if document is not None and not await self._bus_exists(target):
                await self._assignments.delete_one({"_id": object_id})
                raise ReferenceViolation("bus", bus_id)
        return assignment_from_document(document) if document is not None else None

    async def find_assignment_by_user(self, user_id: str) -> Assignment | None:
        with _store_errors():
            document = await self._assignments.find_one({"user": user_id})
        return assignment_from_document(document) if document is not None else None

    async def list_assignments(self) -> list[Assignment]:
        with _store_errors():
            documents = await self._assignments.find().sort(NEWEST_FIRST).to_list(length=None)
        return [assignment_from_document(document) for document in documents]

    async def delete_assignment(self, assignment_id: str) -> Assignment | None:
        object_id = to_object_id(assignment_id)
        if object_id is None:
            return None
        with _store_errors():
            document = await self._assignments.find_one_and_delete({"_id": object_id})
        return assignment_from_document(document) if document is not None else None

    # Announcements

    async def insert_announcement(self, announcement: Announcement) -> Announcement:
        bus_id = to_object_id(announcement.bus_id)
        if bus_id is None:
            raise ReferenceViolation("bus", announcement.bus_id)
        with _store_errors():
            inserted_id = await self._insert_referencing_bus(
                self._announcements, announcement_to_document(announcement, bus_id), bus_id
            )
        return replace(announcement, id=str(inserted_id))

    async def replace_announcement(self, announcement: Announcement) -> Announcement | None:
        object_id = to_object_id(announcement.id)
        if object_id is None:
            return None
        with _store_errors():
            document = await self._announcements.find_one_and_update(
                {"_id": object_id},
                {
                    "$set": {
                        "title": announcement.title,
                        "message": announcement.message,
                        "isActive": announcement.is_active,
                    }
                },
                return_document=ReturnDocument.AFTER,
            )
        return announcement_from_document(document) if document is not None else None

    async def get_announcement(self, announcement_id: str) -> Announcement | None:
        object_id = to_object_id(announcement_id)
        if object_id is None:
            return None
        with _store_errors():
            document = await self._announcements.find_one({"_id": object_id})
        return announcement_from_document(document) if document is not None else None

    async def list_announcements(
        self,
        bus_id: str | None = None,
        active_only: bool = False,
        limit: int | None = None,
    ) -> list[Announcement]:
        query: dict[str, Any] = {}
        if bus_id is not None:
            object_id = to_object_id(bus_id)
            if object_id is None:
                return []
            query["bus"] = object_id
        if active_only:
            query["isActive"] = True

        with _store_errors():
            cursor = self._announcements.find(query).sort(NEWEST_FIRST)
            if limit is not None:
                cursor = cursor.limit(limit)
            documents = await cursor.to_list(length=None)
        return [announcement_from_document(document) for document in documents]

    async def delete_announcement(self, announcement_id: str) -> Announcement | None:
        object_id = to_object_id(announcement_id)
        if object_id is None:
            return None
        with _store_errors():
            document = await self._announcements.find_one_and_delete({"_id": object_id})
        return announcement_from_document(document) if document is not None else None

    # Chat

    async def insert_message(self, message: ChatMessage) -> ChatMessage:
        bus_id = to_object_id(message.bus_id)
        if bus_id is None:
            raise ReferenceViolation("bus", message.bus_id)
        with _store_errors():
            inserted_id = await self._insert_referencing_bus(
                self._chats, message_to_document(message, bus_id), bus_id
            )
        return replace(message, id=str(inserted_id))

    async def list_recent_messages(self, bus_id: str, limit: int) -> list[ChatMessage]:
        object_id = to_object_id(bus_id)
        if object_id is None:
            return []
        with _store_errors():
            documents = await (
                self._chats.find({"bus": object_id})
                .sort(NEWEST_FIRST)
                .limit(limit)
                .to_list(length=None)
            )
        return [message_from_document(document) for document in documents]
