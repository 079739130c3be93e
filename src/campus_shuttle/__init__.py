"""Campus shuttle fleet: routes, assignments, announcements and group chat."""

__version__ = "0.1.0"
