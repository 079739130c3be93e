"""In-memory user directory backed by the configured roster."""

import hashlib
import logging
from collections.abc import Iterable

from campus_shuttle.domain.models import User
from campus_shuttle.domain.ports import UserDirectory

logger = logging.getLogger(__name__)


def _digest(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


class InMemoryUserDirectory(UserDirectory):
    """Looks users up by id and by bearer token.

    Tokens are only kept as SHA-256 digests.
    """

    def __init__(self, credentials: Iterable[tuple[User, str]] = ()) -> None:
        """Initialize from (user, token) pairs.

        Raises:
            ValueError: If a user id or token appears twice.
        """
        self._users: dict[str, User] = {}
        self._user_ids_by_digest: dict[str, str] = {}
        for user, token in credentials:
            self.add(user, token)

    def add(self, user: User, token: str) -> None:
        """Register a user with its bearer token."""
        if user.id in self._users:
            raise ValueError(f"Duplicate user id: {user.id}")
        digest = _digest(token)
        if digest in self._user_ids_by_digest:
            raise ValueError(f"Duplicate token for user {user.id}")
        self._users[user.id] = user
        self._user_ids_by_digest[digest] = user.id
        logger.debug(f"Registered user {user.id} ({user.role.value})")

    def get_user(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def find_by_token(self, token: str) -> User | None:
        if not token:
            return None
        user_id = self._user_ids_by_digest.get(_digest(token))
        return self._users.get(user_id) if user_id else None

    def list_users(self) -> list[User]:
        return list(self._users.values())
