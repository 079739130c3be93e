"""User and caller identity domain models."""

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    """The two fixed roles."""

    STUDENT = "student"
    ADMIN = "admin"


@dataclass(frozen=True)
class User:
    """A rider or administrator known to the user directory."""

    id: str
    name: str
    email: str
    role: UserRole = UserRole.STUDENT
    roll_number: str | None = None


@dataclass(frozen=True)
class Identity:
    """A resolved caller."""

    user_id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN
