"""Announcement domain model."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AnnouncementState(str, Enum):
    """Visibility state, independent of the announcement's presence in the store."""

    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class Announcement:
    """An administrator broadcast to the riders of one bus."""

    id: str
    bus_id: str
    title: str
    message: str
    created_by: str
    created_at: datetime
    state: AnnouncementState = AnnouncementState.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.state is AnnouncementState.ACTIVE
