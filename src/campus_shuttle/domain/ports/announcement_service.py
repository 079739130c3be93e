"""Announcement service port."""

from typing import Protocol

from campus_shuttle.domain.models.summaries import AnnouncementDetails


class AnnouncementService(Protocol):
    """Port for the per-bus announcement feed."""

    async def create(
        self, bus_id: str, title: str, message: str, author_id: str
    ) -> AnnouncementDetails:
        """Publish a new, active announcement."""
        ...

    async def list_global_active(self) -> list[AnnouncementDetails]:
        """Active announcements across all buses, newest first."""
        ...

    async def list_for_bus(self, bus_id: str) -> list[AnnouncementDetails]:
        """Active announcements of one bus, newest first."""
        ...

    async def list_for_bus_audit(self, bus_id: str) -> list[AnnouncementDetails]:
        """Every announcement of one bus, newest first."""
        ...

    async def update(
        self,
        announcement_id: str,
        title: str | None = None,
        message: str | None = None,
        is_active: bool | None = None,
    ) -> AnnouncementDetails:
        """Edit text or toggle visibility."""
        ...

    async def delete(self, announcement_id: str) -> None:
        """Hard-delete an announcement."""
        ...
