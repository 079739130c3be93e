"""Wall clock adapter."""

from datetime import UTC, datetime

from campus_shuttle.domain.contracts import Clock


class SystemClock(Clock):
    """Current UTC time."""

    def now(self) -> datetime:
        return datetime.now(UTC)
