"""Protocol for reading the current time."""

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Source of timestamps for created/updated fields."""

    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        ...
