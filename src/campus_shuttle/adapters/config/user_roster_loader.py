"""User roster loader."""

import logging

from campus_shuttle.adapters.config.app_config import AppConfig
from campus_shuttle.domain.models.user import User, UserRole

logger = logging.getLogger(__name__)

REQUIRED_USER_KEYS = ("id", "name", "email", "token")


class UserRosterLoader:
    """Loads (user, bearer token) pairs from app config."""

    @staticmethod
    def load(config: AppConfig) -> list[tuple[User, str]]:
        """Load the user roster from app config.

        Incomplete entries are skipped with a warning. An unknown role is a
        configuration error.
        """
        credentials: list[tuple[User, str]] = []

        for position, user_data in enumerate(config.get_users_config(), start=1):
            if not isinstance(user_data, dict):
                logger.warning(f"Skipping users entry #{position}: not a table")
                continue

            values = {key: str(user_data.get(key, "")).strip() for key in REQUIRED_USER_KEYS}
            missing = [key for key, value in values.items() if not value]
            if missing:
                logger.warning(f"Skipping users entry #{position}: missing {', '.join(missing)}")
                continue

            role_value = str(user_data.get("role", UserRole.STUDENT.value)).strip().lower()
            try:
                role = UserRole(role_value)
            except ValueError as e:
                raise ValueError(
                    f"users entry #{position} has invalid role '{role_value}' "
                    f"(expected 'student' or 'admin')"
                ) from e

            roll_number = user_data.get("roll_number")
            user = User(
                id=values["id"],
                name=values["name"],
                email=values["email"].lower(),
                role=role,
                roll_number=str(roll_number).strip() if roll_number else None,
            )
            credentials.append((user, values["token"]))

        return credentials
