"""Assignment service port."""

from typing import Protocol

from campus_shuttle.domain.models.summaries import AssignmentDetails, AssignmentUpsert


class AssignmentService(Protocol):
    """Port for the one-bus-per-user assignment operations."""

    async def get_for_user(self, user_id: str) -> AssignmentDetails | None:
        """Get the assignment of a user, or None if not yet assigned."""
        ...

    async def list_all(self) -> list[AssignmentDetails]:
        """List all assignments, newest first."""
        ...

    async def upsert(self, user_id: str, bus_id: str) -> AssignmentUpsert:
        """Assign a user to a bus, repointing an existing assignment."""
        ...

    async def remove(self, assignment_id: str) -> None:
        """Delete an assignment."""
        ...
