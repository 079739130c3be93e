"""Announcement feed endpoints."""

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from campus_shuttle.domain.models import AnnouncementDetails
from campus_shuttle.domain.ports import AnnouncementService

from ..schemas import AnnouncementCreateRequest, AnnouncementUpdateRequest, parse_body
from ..serializers import serialize_announcement


def _feed(request: Request) -> AnnouncementService:
    feed: AnnouncementService = request.app.state.announcement_service
    return feed


def _many(announcements: list[AnnouncementDetails]) -> JSONResponse:
    return JSONResponse({"announcements": [serialize_announcement(a) for a in announcements]})


async def list_all_active(request: Request) -> JSONResponse:
    request.app.state.identity.resolve(request)
    return _many(await _feed(request).list_global_active())


async def list_bus_active(request: Request) -> JSONResponse:
    request.app.state.identity.resolve(request)
    return _many(await _feed(request).list_for_bus(request.path_params["bus_id"]))


async def list_bus_audit(request: Request) -> JSONResponse:
    request.app.state.identity.require_admin(request)
    return _many(await _feed(request).list_for_bus_audit(request.path_params["bus_id"]))


async def create_announcement(request: Request) -> JSONResponse:
    identity = request.app.state.identity.require_admin(request)
    body = await parse_body(request, AnnouncementCreateRequest)
    details = await _feed(request).create(
        body.bus_id or "", body.title or "", body.message or "", identity.user_id
    )
    return JSONResponse({"announcement": serialize_announcement(details)}, status_code=201)


async def update_announcement(request: Request) -> JSONResponse:
    request.app.state.identity.require_admin(request)
    body = await parse_body(request, AnnouncementUpdateRequest)
    details = await _feed(request).update(
        request.path_params["announcement_id"],
        title=body.title,
        message=body.message,
        is_active=body.is_active,
    )
    return JSONResponse({"announcement": serialize_announcement(details)})


async def delete_announcement(request: Request) -> JSONResponse:
    request.app.state.identity.require_admin(request)
    await _feed(request).delete(request.path_params["announcement_id"])
    return JSONResponse({"message": "Announcement deleted successfully"})


# /all must be registered before the per-id routes
routes = [
    Route("/api/announcements/all", list_all_active, methods=["GET"]),
    Route("/api/announcements/bus/{bus_id}", list_bus_active, methods=["GET"]),
    Route("/api/announcements/bus/{bus_id}/all", list_bus_audit, methods=["GET"]),
    Route("/api/announcements", create_announcement, methods=["POST"]),
    Route("/api/announcements/{announcement_id}", update_announcement, methods=["PUT"]),
    Route("/api/announcements/{announcement_id}", delete_announcement, methods=["DELETE"]),
]
