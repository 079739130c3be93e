"""Starlette web adapter exposing the core operations over HTTP."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from campus_shuttle.adapters.config import AppConfig
from campus_shuttle.domain.ports import (
    AnnouncementService,
    AssignmentService,
    BusDirectoryService,
    ChatService,
    UserDirectory,
)

from .errors import EXCEPTION_HANDLERS
from .identity import BearerIdentityResolver
from .rate_limit_middleware import RateLimitMiddleware
from .routes import api_routes

logger = logging.getLogger(__name__)


async def _always_healthy() -> bool:
    return True


class ShuttleWebAdapter:
    """Serves the bus directory, assignments, announcements and chat over HTTP.

    Clients poll; nothing is pushed. A write is visible to the next read
    issued after its response.
    """

    def __init__(
        self,
        bus_directory: BusDirectoryService,
        assignment_service: AssignmentService,
        announcement_service: AnnouncementService,
        chat_service: ChatService,
        user_directory: UserDirectory,
        config: AppConfig,
        health_check: Callable[[], Awaitable[bool]] | None = None,
    ) -> None:
        """Initialize the web adapter.

        Args:
            bus_directory: Bus lifecycle operations.
            assignment_service: User-to-bus assignment operations.
            announcement_service: Announcement feed operations.
            chat_service: Group chat operations.
            user_directory: Directory used by the identity check.
            config: Application configuration.
            health_check: Returns whether the backing store is reachable.
        """
        if not isinstance(config, AppConfig):
            raise TypeError("config must be an AppConfig instance")

        self.bus_directory = bus_directory
        self.assignment_service = assignment_service
        self.announcement_service = announcement_service
        self.chat_service = chat_service
        self.user_directory = user_directory
        self.config = config
        self.health_check = health_check or _always_healthy
        self._server: Any | None = None

    def build_app(self) -> Starlette:
        """Build the ASGI application."""

        async def healthz(_request: Request) -> JSONResponse:
            """Health check endpoint for load balancers and monitoring."""
            available = await self.health_check()
            return JSONResponse(
                {"ok": available, "store": "available" if available else "unavailable"},
                status_code=200 if available else 503,
            )

        app = Starlette(
            routes=[Route("/healthz", healthz, methods=["GET"]), *api_routes],
            middleware=[
                Middleware(
                    RateLimitMiddleware,
                    user_directory=self.user_directory,
                    requests_per_minute=self.config.rate_limit_per_minute,
                )
            ],
            exception_handlers=EXCEPTION_HANDLERS,  # type: ignore[arg-type]
        )
        app.state.identity = BearerIdentityResolver(self.user_directory)
        app.state.bus_directory = self.bus_directory
        app.state.assignment_service = self.assignment_service
        app.state.announcement_service = self.announcement_service
        app.state.chat_service = self.chat_service
        logger.info(f"Registered {len(api_routes)} API routes")
        return app

    async def start(self) -> None:
        """Start the web server."""
        import uvicorn

        config = uvicorn.Config(
            self.build_app(),
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level.lower(),
        )
        self._server = uvicorn.Server(config)
        logger.info(f"Serving on http://{self.config.host}:{self.config.port}")
        await self._server.serve()

    async def stop(self) -> None:
        """Stop the web server."""
        if self._server:
            self._server.should_exit = True
