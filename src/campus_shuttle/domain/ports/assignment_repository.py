"""Assignment repository port."""

from typing import Protocol

from campus_shuttle.domain.models.assignment import Assignment


class AssignmentRepository(Protocol):
    """Port for persisting assignments.

    The store enforces at most one assignment per user: `insert_assignment`
    raises `UniqueConstraintViolation` when the user already has one, and
    `ReferenceViolation` when the bus does not exist.
    """

    async def insert_assignment(self, assignment: Assignment) -> Assignment:
        """Persist a new assignment and return it with its assigned id."""
        ...

    async def repoint_assignment(self, assignment_id: str, bus_id: str) -> Assignment | None:
        """Point an existing assignment at another bus. None if it no longer exists."""
        ...

    async def find_assignment_by_user(self, user_id: str) -> Assignment | None:
        """Get the assignment of a user, if any."""
        ...

    async def list_assignments(self) -> list[Assignment]:
        """List all assignments, newest first."""
        ...

    async def delete_assignment(self, assignment_id: str) -> Assignment | None:
        """Delete an assignment. Returns the deleted record or None."""
        ...
