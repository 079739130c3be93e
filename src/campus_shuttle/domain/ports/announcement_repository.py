"""Announcement repository port."""

from typing import Protocol

from campus_shuttle.domain.models.announcement import Announcement


class AnnouncementRepository(Protocol):
    """Port for persisting announcements."""

    async def insert_announcement(self, announcement: Announcement) -> Announcement:
        """Persist a new announcement. Raises `ReferenceViolation` for an unknown bus."""
        ...

    async def replace_announcement(self, announcement: Announcement) -> Announcement | None:
        """Replace a stored announcement. Returns None if it no longer exists."""
        ...

    async def get_announcement(self, announcement_id: str) -> Announcement | None:
        """Get an announcement by id."""
        ...

    async def list_announcements(
        self,
        bus_id: str | None = None,
        active_only: bool = False,
        limit: int | None = None,
    ) -> list[Announcement]:
        """List announcements newest first, optionally scoped to one bus and capped."""
        ...

    async def delete_announcement(self, announcement_id: str) -> Announcement | None:
        """Hard-delete an announcement. Returns the deleted record or None."""
        ...
