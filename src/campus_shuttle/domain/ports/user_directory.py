"""User directory port."""

from typing import Protocol

from campus_shuttle.domain.models.user import User


class UserDirectory(Protocol):
    """Port for looking up users. Owned outside the core."""

    def get_user(self, user_id: str) -> User | None:
        """Find a user by id."""
        ...

    def find_by_token(self, token: str) -> User | None:
        """Find the user a bearer credential belongs to."""
        ...

    def list_users(self) -> list[User]:
        """List all known users."""
        ...
