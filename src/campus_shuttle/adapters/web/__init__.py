"""Web adapter - HTTP surface of the core."""

from campus_shuttle.adapters.web.app import ShuttleWebAdapter

__all__ = ["ShuttleWebAdapter"]
