"""Request body schemas."""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from starlette.requests import Request

from campus_shuttle.domain.errors import ValidationError


class RequestModel(BaseModel):
    """Base for request bodies: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def provided_fields(self) -> dict[str, Any]:
        """Fields present in the request body, keyed by snake_case name."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class BusFieldsRequest(RequestModel):
    """Body of bus create and update requests.

    Locations and stops are passed through as-is; the route builder decides
    what is valid. A start location in the body is never read.
    """

    route_name: str | None = Field(default=None, alias="routeName")
    bus_number: str | None = Field(default=None, alias="busNumber")
    driver_name: str | None = Field(default=None, alias="driverName")
    driver_phone: str | None = Field(default=None, alias="driverPhone")
    departure_time: str | None = Field(default=None, alias="departureTime")
    current_stop: str | None = Field(default=None, alias="currentStop")
    status: str | None = None
    end_location: Any = Field(default=None, alias="endLocation")
    stops: Any = None


class AssignmentRequest(RequestModel):
    user_id: str | None = Field(default=None, alias="userId")
    bus_id: str | None = Field(default=None, alias="busId")


class AnnouncementCreateRequest(RequestModel):
    bus_id: str | None = Field(default=None, alias="busId")
    title: str | None = None
    message: str | None = None


class AnnouncementUpdateRequest(RequestModel):
    title: str | None = None
    message: str | None = None
    is_active: bool | None = Field(default=None, alias="isActive")


class ChatMessageRequest(RequestModel):
    bus_id: str | None = Field(default=None, alias="busId")
    message: str | None = None


ModelT = TypeVar("ModelT", bound=BaseModel)


async def parse_body(request: Request, model: type[ModelT]) -> ModelT:
    """Parse and validate a JSON request body.

    Raises:
        ValidationError: With code INVALID_REQUEST for malformed JSON or a
            body that does not match the schema.
    """
    try:
        payload = await request.json()
    except ValueError:
        # JSONDecodeError and UnicodeDecodeError
        raise ValidationError("Request body must be valid JSON", "INVALID_REQUEST") from None
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "body"
        raise ValidationError(f"Invalid {location}: {first['msg']}", "INVALID_REQUEST") from None
