"""MongoDB storage adapters."""

from campus_shuttle.adapters.mongo.fleet_store import MongoFleetStore

__all__ = ["MongoFleetStore"]
