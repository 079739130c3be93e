"""Builders for the populated read models."""

from campus_shuttle.domain.models import Bus, BusSummary, User, UserSummary


def summarize_user(user: User | None) -> UserSummary | None:
    """Display summary of a user, or None if unknown."""
    if user is None:
        return None
    return UserSummary(
        id=user.id,
        name=user.name,
        email=user.email,
        roll_number=user.roll_number,
    )


def summarize_bus(bus: Bus | None) -> BusSummary | None:
    """Display summary of a bus, or None if unknown."""
    if bus is None:
        return None
    return BusSummary(
        id=bus.id,
        route_name=bus.route_name,
        bus_number=bus.bus_number,
        driver_name=bus.driver_name,
        status=bus.status,
    )
