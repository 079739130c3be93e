"""Bearer-token identity check run before any core operation."""

import logging

from starlette.requests import Request

from campus_shuttle.domain.models import Identity
from campus_shuttle.domain.ports import UserDirectory

logger = logging.getLogger(__name__)


class AuthenticationRequired(Exception):
    """The caller presented no valid credential."""


class PermissionDenied(Exception):
    """The caller is authenticated but lacks the required role."""


def extract_bearer_token(request: Request) -> str | None:
    """Return the token of an `Authorization: Bearer <token>` header, if present."""
    parts = request.headers.get("Authorization", "").split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


class BearerIdentityResolver:
    """Resolves callers to an identity through the user directory."""

    def __init__(self, user_directory: UserDirectory) -> None:
        self._users = user_directory

    def resolve(self, request: Request) -> Identity:
        """Resolve the caller of a request.

        Raises:
            AuthenticationRequired: Missing or unknown token.
        """
        token = extract_bearer_token(request)
        if token is None:
            raise AuthenticationRequired("Authentication token missing")
        user = self._users.find_by_token(token)
        if user is None:
            raise AuthenticationRequired("Invalid authentication token")
        return Identity(user_id=user.id, role=user.role)

    def require_admin(self, request: Request) -> Identity:
        """Resolve the caller and require the admin role.

        Raises:
            AuthenticationRequired: Missing or unknown token.
            PermissionDenied: The caller is not an admin.
        """
        identity = self.resolve(request)
        if not identity.is_admin:
            logger.warning(f"User {identity.user_id} denied access to admin route {request.url.path}")
            raise PermissionDenied("Admin access required")
        return identity
