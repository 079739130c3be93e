"""Intermediate stop domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Stop:
    """An intermediate stop on a bus route, exclusively owned by one bus."""

    name: str
    latitude: float
    longitude: float
    order: int
    address: str = ""
    arrival_time: str = ""  # Free text, e.g. "7:45 AM"
    description: str = ""
