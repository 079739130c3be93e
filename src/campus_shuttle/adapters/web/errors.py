"""Mapping of core and identity errors to HTTP responses."""

import logging

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from campus_shuttle.domain.errors import (
    ConflictError,
    DependencyUnavailableError,
    NotFoundError,
    ShuttleError,
    ValidationError,
)

from .identity import AuthenticationRequired, PermissionDenied

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[ShuttleError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    ConflictError: 409,
    DependencyUnavailableError: 503,
}
RETRY_AFTER_SECONDS = 5


def _error_response(
    status_code: int, message: str, code: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse({"message": message, "code": code}, status_code=status_code, headers=headers)


async def handle_shuttle_error(request: Request, exc: ShuttleError) -> Response:
    """Turn a core error into a JSON error response."""
    status_code = next(
        (status for error_type, status in STATUS_BY_ERROR.items() if isinstance(exc, error_type)),
        500,
    )
    headers = None
    if exc.retryable:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
        headers = {"Retry-After": str(RETRY_AFTER_SECONDS)}
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.code} {exc.message}")
    return _error_response(status_code, exc.message, exc.code, headers)


async def handle_authentication_required(_request: Request, exc: Exception) -> Response:
    return _error_response(401, str(exc), "UNAUTHENTICATED")


async def handle_permission_denied(_request: Request, exc: Exception) -> Response:
    return _error_response(403, str(exc), "FORBIDDEN")


async def handle_unexpected_error(request: Request, exc: Exception) -> Response:
    logger.exception(f"{request.method} {request.url.path} failed", exc_info=exc)
    return _error_response(500, "Internal server error", "INTERNAL_ERROR")


EXCEPTION_HANDLERS = {
    ShuttleError: handle_shuttle_error,
    AuthenticationRequired: handle_authentication_required,
    PermissionDenied: handle_permission_denied,
    Exception: handle_unexpected_error,
}
