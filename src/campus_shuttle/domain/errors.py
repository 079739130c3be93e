"""Error taxonomy of the core operations.

Every operation either completes fully or raises one of the `ShuttleError`
subclasses below without having mutated state. Store adapters signal
constraint failures with the `ConstraintViolation` family; services
translate those into the public taxonomy.
"""


class ShuttleError(Exception):
    """Base class for errors surfaced to callers of the core."""

    default_code = "ERROR"
    retryable = False

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code


class ValidationError(ShuttleError):
    """A required field is missing or invalid."""

    default_code = "VALIDATION_ERROR"


class NotFoundError(ShuttleError):
    """The referenced id does not exist."""

    default_code = "NOT_FOUND"


class ConflictError(ShuttleError):
    """A write collides with existing state, e.g. a duplicate bus number."""

    default_code = "CONFLICT"


class DependencyUnavailableError(ShuttleError):
    """The backing store cannot be reached. Callers may retry."""

    default_code = "STORE_UNAVAILABLE"
    retryable = True


class ConstraintViolation(Exception):
    """Raised by a store when a write breaks a storage-level constraint."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"{type(self).__name__} on {field}={value!r}")
        self.field = field
        self.value = value


class UniqueConstraintViolation(ConstraintViolation):
    """Another record already holds this value for a unique field."""


class ReferenceViolation(ConstraintViolation):
    """A foreign-key field points to a record that does not exist."""
