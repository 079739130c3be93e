"""HTTP routes grouped by core component."""

from starlette.routing import Route

from . import announcements, assignments, buses, chat

api_routes: list[Route] = [
    *buses.routes,
    *assignments.routes,
    *announcements.routes,
    *chat.routes,
]

__all__ = ["api_routes"]
