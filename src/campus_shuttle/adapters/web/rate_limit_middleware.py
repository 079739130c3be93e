"""Write rate limiting middleware for Starlette using throttled-py."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from throttled import RateLimiterType, Throttled, rate_limiter, store

from campus_shuttle.domain.ports import UserDirectory

from .identity import extract_bearer_token

logger = logging.getLogger(__name__)

LIMITED_METHODS = frozenset({"POST", "PUT", "DELETE"})


def extract_client_ip(request: Request) -> str:
    """Return the originating client IP, honouring the first X-Forwarded-For hop."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()
        if client_ip:
            return client_ip

    if request.client and request.client.host:
        return request.client.host

    logger.warning("Could not determine client IP, using 'unknown'")
    return "unknown"


def caller_key(request: Request, user_directory: UserDirectory) -> str:
    """Key a request by its caller: the user a known bearer token belongs to, else the client IP.

    Unknown tokens fall back to the IP, so a client cannot mint fresh quota
    buckets by inventing tokens.
    """
    token = extract_bearer_token(request)
    if token:
        user = user_directory.find_by_token(token)
        if user is not None:
            return "user:" + user.id
    return "ip:" + extract_client_ip(request)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Limits write requests per caller. Reads pass through so polling clients are never throttled."""

    def __init__(
        self, app: Callable, user_directory: UserDirectory, requests_per_minute: int = 60
    ) -> None:
        """Initialize rate limiting middleware.

        Args:
            app: The ASGI application to wrap.
            user_directory: Directory used to recognise the caller of a token.
            requests_per_minute: Maximum write requests per caller per minute.
        """
        super().__init__(app)
        self.user_directory = user_directory
        self.requests_per_minute = requests_per_minute
        self.quota = rate_limiter.per_min(requests_per_minute, burst=requests_per_minute)
        self.rate_limiter_store = store.MemoryStore()
        logger.info(f"Write rate limiting enabled: {requests_per_minute} requests per minute per caller")

    def _extract_retry_after(self, result: Any) -> float:
        """Read retry_after from a throttled-py result, defaulting to a minute."""
        state = getattr(result, "state", None)
        if state is not None and hasattr(state, "retry_after"):
            return float(state.retry_after)
        return float(getattr(result, "retry_after", 60.0))

    def _create_rate_limit_response(self, key: str, retry_after: float) -> Response:
        """Create the 429 response in the error body format of the API."""
        logger.warning(f"Write rate limit exceeded for {key}, retry after {retry_after:.0f}s")
        return JSONResponse(
            {"message": "Too many requests. Please try again later.", "code": "RATE_LIMITED"},
            status_code=429,
            headers={"Retry-After": str(max(1, int(retry_after)))},
        )

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Enforce the write quota of the caller."""
        if request.method not in LIMITED_METHODS:
            return await call_next(request)

        key = caller_key(request, self.user_directory)
        throttle = Throttled(
            key=key,
            using=RateLimiterType.TOKEN_BUCKET.value,
            quota=self.quota,
            store=self.rate_limiter_store,
        )
        result = throttle.limit()
        if result.limited:
            return self._create_rate_limit_response(key, self._extract_retry_after(result))

        return await call_next(request)
