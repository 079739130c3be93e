"""In-memory adapters."""

from campus_shuttle.adapters.memory.user_directory import InMemoryUserDirectory

__all__ = ["InMemoryUserDirectory"]
