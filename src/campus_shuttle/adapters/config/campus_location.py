"""Campus origin provider built from configuration."""

import logging

from campus_shuttle.adapters.config.app_config import AppConfig
from campus_shuttle.domain.models.geo_point import GeoPoint
from campus_shuttle.domain.ports.campus_location_provider import CampusLocationProvider

logger = logging.getLogger(__name__)

FALLBACK_LATITUDE = 33.67941436242526
FALLBACK_LONGITUDE = 73.19485142813129
DEFAULT_CAMPUS_NAME = "Federal Urdu University of Arts, Sciences & Technology, Islamabad"


def _parse_coordinate(value: str | None, low: float, high: float) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    # NaN fails both comparisons
    return number if low <= number <= high else None


class StaticCampusLocationProvider(CampusLocationProvider):
    """Returns one fixed campus origin, resolved once at startup."""

    def __init__(self, location: GeoPoint) -> None:
        self._location = location

    def get_campus_location(self) -> GeoPoint:
        return self._location

    @classmethod
    def from_config(cls, config: AppConfig) -> "StaticCampusLocationProvider":
        """Resolve the campus origin from CAMPUS_* settings.

        Missing or invalid coordinates fall back to the built-in campus
        coordinates with a warning.
        """
        latitude = _parse_coordinate(config.campus_lat, -90.0, 90.0)
        longitude = _parse_coordinate(config.campus_lng, -180.0, 180.0)
        if latitude is None or longitude is None:
            logger.warning(
                f"CAMPUS_LAT/CAMPUS_LNG not set or invalid. Falling back to "
                f"({FALLBACK_LATITUDE}, {FALLBACK_LONGITUDE}). Set these env vars for accurate routes."
            )
            latitude, longitude = FALLBACK_LATITUDE, FALLBACK_LONGITUDE

        location = GeoPoint(
            name=config.campus_name.strip() or DEFAULT_CAMPUS_NAME,
            latitude=latitude,
            longitude=longitude,
            address=config.campus_address.strip(),
        )
        logger.info(f"Campus origin: {location.name} ({location.latitude}, {location.longitude})")
        return cls(location)
