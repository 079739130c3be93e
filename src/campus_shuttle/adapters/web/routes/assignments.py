"""Assignment registry endpoints."""

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from campus_shuttle.domain.ports import AssignmentService

from ..schemas import AssignmentRequest, parse_body
from ..serializers import serialize_assignment


def _registry(request: Request) -> AssignmentService:
    registry: AssignmentService = request.app.state.assignment_service
    return registry


async def get_my_assignment(request: Request) -> JSONResponse:
    identity = request.app.state.identity.resolve(request)
    details = await _registry(request).get_for_user(identity.user_id)
    return JSONResponse({"assignment": serialize_assignment(details) if details else None})


async def list_assignments(request: Request) -> JSONResponse:
    request.app.state.identity.require_admin(request)
    assignments = await _registry(request).list_all()
    return JSONResponse({"assignments": [serialize_assignment(a) for a in assignments]})


async def upsert_assignment(request: Request) -> JSONResponse:
    request.app.state.identity.require_admin(request)
    body = await parse_body(request, AssignmentRequest)
    outcome = await _registry(request).upsert(body.user_id or "", body.bus_id or "")
    return JSONResponse(
        {"assignment": serialize_assignment(outcome.details)},
        status_code=201 if outcome.created else 200,
    )


async def delete_assignment(request: Request) -> JSONResponse:
    request.app.state.identity.require_admin(request)
    await _registry(request).remove(request.path_params["assignment_id"])
    return JSONResponse({"message": "Assignment removed successfully"})


routes = [
    Route("/api/assignments/me", get_my_assignment, methods=["GET"]),
    Route("/api/assignments", list_assignments, methods=["GET"]),
    Route("/api/assignments", upsert_assignment, methods=["POST"]),
    Route("/api/assignments/{assignment_id}", delete_assignment, methods=["DELETE"]),
]
