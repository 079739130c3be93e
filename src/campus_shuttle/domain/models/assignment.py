"""Assignment domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Assignment:
    """Links one user to exactly one bus. At most one exists per user."""

    id: str
    user_id: str
    bus_id: str
    created_at: datetime
