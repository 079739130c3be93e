"""Configuration adapters."""

from campus_shuttle.adapters.config.app_config import AppConfig
from campus_shuttle.adapters.config.campus_location import StaticCampusLocationProvider
from campus_shuttle.adapters.config.user_roster_loader import UserRosterLoader

__all__ = ["AppConfig", "StaticCampusLocationProvider", "UserRosterLoader"]
