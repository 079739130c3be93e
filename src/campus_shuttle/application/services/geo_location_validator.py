"""Validation and normalization of user-supplied locations."""

import math
from collections.abc import Mapping
from typing import Any

from campus_shuttle.domain.errors import ValidationError
from campus_shuttle.domain.models import GeoPoint

INVALID_LOCATION = "INVALID_LOCATION"


def clean_text(value: Any) -> str:
    """Return a trimmed string, or an empty string for non-string input."""
    return value.strip() if isinstance(value, str) else ""


def to_coordinate(value: Any) -> float | None:
    """Coerce a coordinate to a finite float.

    Returns None for missing values, empty strings, booleans, anything that
    is not numeric, and NaN or infinity.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class GeoLocationValidator:
    """Validates a (name, latitude, longitude, address) candidate into a GeoPoint."""

    def validate(self, candidate: Mapping[str, Any] | None, fallback_name: str) -> GeoPoint:
        """Validate a location candidate.

        The display name falls back to `fallback_name` when it is blank after
        trimming. Coordinates are never defaulted.

        Args:
            candidate: Mapping with `name`, `latitude`, `longitude` and an
                optional `address`.
            fallback_name: Display name used when the candidate has none.

        Returns:
            The normalized point.

        Raises:
            ValidationError: If a coordinate is missing, not finite or out of range.
        """
        if not isinstance(candidate, Mapping):
            raise ValidationError("Location with valid coordinates is required", INVALID_LOCATION)

        latitude = to_coordinate(candidate.get("latitude"))
        longitude = to_coordinate(candidate.get("longitude"))
        if latitude is None or longitude is None:
            raise ValidationError("Location with valid coordinates is required", INVALID_LOCATION)
        if not -90.0 <= latitude <= 90.0 or not -180.0 <= longitude <= 180.0:
            raise ValidationError("Location coordinates are out of range", INVALID_LOCATION)

        return GeoPoint(
            name=clean_text(candidate.get("name")) or fallback_name,
            latitude=latitude,
            longitude=longitude,
            address=clean_text(candidate.get("address")),
        )
