"""Group chat endpoints."""

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from campus_shuttle.domain.ports import ChatService

from ..schemas import ChatMessageRequest, parse_body
from ..serializers import serialize_chat_message


def _chat(request: Request) -> ChatService:
    chat: ChatService = request.app.state.chat_service
    return chat


async def list_bus_messages(request: Request) -> JSONResponse:
    request.app.state.identity.resolve(request)
    messages = await _chat(request).list_for_bus(request.path_params["bus_id"])
    return JSONResponse({"messages": [serialize_chat_message(m) for m in messages]})


async def post_message(request: Request) -> JSONResponse:
    identity = request.app.state.identity.resolve(request)
    body = await parse_body(request, ChatMessageRequest)
    details = await _chat(request).append(body.bus_id or "", identity.user_id, body.message or "")
    return JSONResponse({"message": serialize_chat_message(details)}, status_code=201)


routes = [
    Route("/api/chat/bus/{bus_id}", list_bus_messages, methods=["GET"]),
    Route("/api/chat", post_message, methods=["POST"]),
]
