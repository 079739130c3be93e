"""Announcement feed: per-bus broadcasts with soft deactivation."""

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from campus_shuttle.application.services.geo_location_validator import clean_text
from campus_shuttle.application.services.summaries import summarize_bus, summarize_user
from campus_shuttle.domain.errors import NotFoundError, ReferenceViolation, ValidationError
from campus_shuttle.domain.models import (
    Announcement,
    AnnouncementDetails,
    AnnouncementState,
    BusSummary,
)

if TYPE_CHECKING:
    from campus_shuttle.domain.contracts import Clock
    from campus_shuttle.domain.ports import AnnouncementRepository, BusRepository, UserDirectory

logger = logging.getLogger(__name__)

GLOBAL_FEED_LIMIT = 20
BUS_FEED_LIMIT = 10


class AnnouncementFeed:
    """Publishes announcements and serves the global, per-bus and audit views.

    Readers other than admins only ever see active announcements.
    """

    def __init__(
        self,
        announcement_repository: "AnnouncementRepository",
        bus_repository: "BusRepository",
        user_directory: "UserDirectory",
        clock: "Clock",
    ) -> None:
        self._announcements = announcement_repository
        self._buses = bus_repository
        self._users = user_directory
        self._clock = clock

    async def create(
        self, bus_id: str, title: str, message: str, author_id: str
    ) -> AnnouncementDetails:
        """Publish an announcement. New announcements are always active."""
        title = clean_text(title)
        message = clean_text(message)
        if not clean_text(bus_id) or not title or not message:
            raise ValidationError("Bus ID, title, and message are required", "MISSING_FIELDS")

        try:
            created = await self._announcements.insert_announcement(
                Announcement(
                    id="",
                    bus_id=bus_id,
                    title=title,
                    message=message,
                    created_by=author_id,
                    created_at=self._clock.now(),
                    state=AnnouncementState.ACTIVE,
                )
            )
        except ReferenceViolation:
            raise NotFoundError("Bus not found", "BUS_NOT_FOUND") from None

        logger.info(f"Created announcement {created.id} for bus {bus_id}")
        return (await self._describe([created]))[0]

    async def list_global_active(self) -> list[AnnouncementDetails]:
        """Active announcements of all buses, newest first, at most 20."""
        announcements = await self._announcements.list_announcements(
            active_only=True, limit=GLOBAL_FEED_LIMIT
        )
        logger.debug(f"Global feed: {len(announcements)} active announcements")
        return await self._describe(announcements)

    async def list_for_bus(self, bus_id: str) -> list[AnnouncementDetails]:
        """Active announcements of one bus, newest first, at most 10."""
        announcements = await self._announcements.list_announcements(
            bus_id=bus_id, active_only=True, limit=BUS_FEED_LIMIT
        )
        return await self._describe(announcements)

    async def list_for_bus_audit(self, bus_id: str) -> list[AnnouncementDetails]:
        """Every announcement of one bus regardless of state, newest first."""
        return await self._describe(await self._announcements.list_announcements(bus_id=bus_id))

    async def update(
        self,
        announcement_id: str,
        title: str | None = None,
        message: str | None = None,
        is_active: bool | None = None,
    ) -> AnnouncementDetails:
        """Edit the text or toggle the visibility of an announcement."""
        existing = await self._announcements.get_announcement(announcement_id)
        if existing is None:
            raise NotFoundError("Announcement not found")

        updates: dict[str, Any] = {}
        if title is not None:
            updates["title"] = clean_text(title)
        if message is not None:
            updates["message"] = clean_text(message)
        if any(not updates[key] for key in updates):
            raise ValidationError("Title and message cannot be empty", "MISSING_FIELDS")
        if is_active is not None:
            updates["state"] = AnnouncementState.ACTIVE if is_active else AnnouncementState.INACTIVE

        updated = await self._announcements.replace_announcement(replace(existing, **updates))
        if updated is None:
            raise NotFoundError("Announcement not found")
        logger.info(f"Updated announcement {updated.id} ({', '.join(sorted(updates)) or 'no changes'})")
        return (await self._describe([updated]))[0]

    async def delete(self, announcement_id: str) -> None:
        """Hard-delete an announcement."""
        deleted = await self._announcements.delete_announcement(announcement_id)
        if deleted is None:
            raise NotFoundError("Announcement not found")
        logger.info(f"Deleted announcement {deleted.id} of bus {deleted.bus_id}")

    async def _describe(self, announcements: list[Announcement]) -> list[AnnouncementDetails]:
        bus_summaries: dict[str, BusSummary | None] = {}
        for bus_id in {a.bus_id for a in announcements}:
            bus_summaries[bus_id] = summarize_bus(await self._buses.get_bus(bus_id))
        return [
            AnnouncementDetails(
                announcement=announcement,
                author=summarize_user(self._users.get_user(announcement.created_by)),
                bus=bus_summaries[announcement.bus_id],
            )
            for announcement in announcements
        ]
