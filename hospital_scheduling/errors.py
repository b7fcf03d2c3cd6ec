"""Base exceptions shared across the scheduling core.

Module-specific errors are defined next to the code that raises them and
derive from these.
"""


class SchedulingError(Exception):
    """Base class for every error raised by the scheduling core."""
    pass


class NotFoundError(SchedulingError, LookupError):
    """Raised when a record looked up by id does not exist."""
    pass


class DoctorNotFoundError(NotFoundError):
    """Raised when a doctor id is not in the registry."""
    pass
