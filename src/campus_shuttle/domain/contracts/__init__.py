"""Internal contracts between components."""

from campus_shuttle.domain.contracts.clock import Clock

__all__ = ["Clock"]
