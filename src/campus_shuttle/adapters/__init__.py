"""Adapters layer - storage, configuration and HTTP integrations."""

from campus_shuttle.adapters.config import AppConfig
from campus_shuttle.adapters.memory import InMemoryUserDirectory
from campus_shuttle.adapters.mongo import MongoFleetStore
from campus_shuttle.adapters.system_clock import SystemClock

__all__ = [
    "AppConfig",
    "InMemoryUserDirectory",
    "MongoFleetStore",
    "SystemClock",
]
