"""Assignment registry: at most one bus per user."""

import logging
from typing import TYPE_CHECKING

from campus_shuttle.application.services.summaries import summarize_bus, summarize_user
from campus_shuttle.domain.errors import (
    ConflictError,
    NotFoundError,
    ReferenceViolation,
    UniqueConstraintViolation,
    ValidationError,
)
from campus_shuttle.domain.models import Assignment, AssignmentDetails, AssignmentUpsert

if TYPE_CHECKING:
    from campus_shuttle.domain.contracts import Clock
    from campus_shuttle.domain.ports import AssignmentRepository, BusRepository, UserDirectory

logger = logging.getLogger(__name__)

# Each attempt either lands a write or observes a concurrent writer's row.
MAX_UPSERT_ATTEMPTS = 3


class AssignmentRegistry:
    """Creates, repoints and removes user-to-bus assignments.

    Uniqueness per user is enforced by the store. An insert that loses a race
    against another writer for the same user falls back to repointing the
    row that writer created.
    """

    def __init__(
        self,
        assignment_repository: "AssignmentRepository",
        bus_repository: "BusRepository",
        user_directory: "UserDirectory",
        clock: "Clock",
    ) -> None:
        self._assignments = assignment_repository
        self._buses = bus_repository
        self._users = user_directory
        self._clock = clock

    async def get_for_user(self, user_id: str) -> AssignmentDetails | None:
        """Get the assignment of a user. Not being assigned yet is not an error."""
        assignment = await self._assignments.find_assignment_by_user(user_id)
        if assignment is None:
            return None
        return await self._details(assignment)

    async def list_all(self) -> list[AssignmentDetails]:
        """List all assignments, newest first."""
        assignments = await self._assignments.list_assignments()
        return [await self._details(assignment) for assignment in assignments]

    async def upsert(self, user_id: str, bus_id: str) -> AssignmentUpsert:
        """Assign a user to a bus.

        An existing assignment of the user is repointed in place, keeping its
        id; otherwise a new one is created.

        Raises:
            ValidationError: A missing user or bus id.
            NotFoundError: USER_NOT_FOUND or BUS_NOT_FOUND.
            ConflictError: The user's assignment kept changing under us.
        """
        if not user_id or not bus_id:
            raise ValidationError("User ID and Bus ID are required", "MISSING_FIELDS")
        if self._users.get_user(user_id) is None:
            raise NotFoundError("User not found", "USER_NOT_FOUND")
        if await self._buses.get_bus(bus_id) is None:
            raise NotFoundError("Bus not found", "BUS_NOT_FOUND")

        for attempt in range(1, MAX_UPSERT_ATTEMPTS + 1):
            try:
                existing = await self._assignments.find_assignment_by_user(user_id)
                if existing is not None:
                    repointed = await self._assignments.repoint_assignment(existing.id, bus_id)
                    if repointed is not None:
                        logger.info(
                            f"Repointed assignment {repointed.id} of user {user_id} "
                            f"from bus {existing.bus_id} to bus {bus_id}"
                        )
                        return AssignmentUpsert(details=await self._details(repointed), created=False)
                    # Removed between the read and the repoint
                    continue

                created = await self._assignments.insert_assignment(
                    Assignment(id="", user_id=user_id, bus_id=bus_id, created_at=self._clock.now())
                )
            except UniqueConstraintViolation:
                logger.info(
                    f"Concurrent assignment of user {user_id} detected "
                    f"(attempt {attempt}), retrying as update"
                )
                continue
            except ReferenceViolation:
                raise NotFoundError("Bus not found", "BUS_NOT_FOUND") from None

            logger.info(f"Created assignment {created.id}: user {user_id} -> bus {bus_id}")
            return AssignmentUpsert(details=await self._details(created), created=True)

        logger.warning(f"Giving up assigning user {user_id} after {MAX_UPSERT_ATTEMPTS} attempts")
        raise ConflictError("Assignment changed concurrently, please retry", "ASSIGNMENT_CONFLICT")

    async def remove(self, assignment_id: str) -> None:
        """Delete an assignment. The user and bus are untouched."""
        deleted = await self._assignments.delete_assignment(assignment_id)
        if deleted is None:
            raise NotFoundError("Assignment not found")
        logger.info(f"Removed assignment {deleted.id} of user {deleted.user_id}")

    async def _details(self, assignment: Assignment) -> AssignmentDetails:
        return AssignmentDetails(
            assignment=assignment,
            user=summarize_user(self._users.get_user(assignment.user_id)),
            bus=summarize_bus(await self._buses.get_bus(assignment.bus_id)),
        )
