"""Bus directory endpoints."""

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from campus_shuttle.domain.ports import BusDirectoryService

from ..schemas import BusFieldsRequest, parse_body
from ..serializers import serialize_bus


def _directory(request: Request) -> BusDirectoryService:
    directory: BusDirectoryService = request.app.state.bus_directory
    return directory


async def list_buses(request: Request) -> JSONResponse:
    request.app.state.identity.resolve(request)
    buses = await _directory(request).list()
    return JSONResponse({"buses": [serialize_bus(bus) for bus in buses]})


async def get_bus(request: Request) -> JSONResponse:
    request.app.state.identity.resolve(request)
    bus = await _directory(request).get(request.path_params["bus_id"])
    return JSONResponse({"bus": serialize_bus(bus)})


async def create_bus(request: Request) -> JSONResponse:
    request.app.state.identity.require_admin(request)
    body = await parse_body(request, BusFieldsRequest)
    bus = await _directory(request).create(body.provided_fields())
    return JSONResponse({"bus": serialize_bus(bus)}, status_code=201)


async def update_bus(request: Request) -> JSONResponse:
    request.app.state.identity.require_admin(request)
    body = await parse_body(request, BusFieldsRequest)
    bus = await _directory(request).update(request.path_params["bus_id"], body.provided_fields())
    return JSONResponse({"bus": serialize_bus(bus)})


async def cycle_bus_status(request: Request) -> JSONResponse:
    request.app.state.identity.require_admin(request)
    bus = await _directory(request).cycle_status(request.path_params["bus_id"])
    return JSONResponse({"bus": serialize_bus(bus)})


async def delete_bus(request: Request) -> JSONResponse:
    request.app.state.identity.require_admin(request)
    await _directory(request).delete(request.path_params["bus_id"])
    return JSONResponse({"message": "Bus deleted successfully"})


routes = [
    Route("/api/buses", list_buses, methods=["GET"]),
    Route("/api/buses", create_bus, methods=["POST"]),
    Route("/api/buses/{bus_id}", get_bus, methods=["GET"]),
    Route("/api/buses/{bus_id}", update_bus, methods=["PUT"]),
    Route("/api/buses/{bus_id}", delete_bus, methods=["DELETE"]),
    Route("/api/buses/{bus_id}/status/cycle", cycle_bus_status, methods=["POST"]),
]
