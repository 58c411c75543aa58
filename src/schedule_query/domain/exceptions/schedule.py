class ScheduleError(Exception):
    """Base exception for schedule query failures."""


class NotFound(ScheduleError, LookupError):
    """Raised when a document, trip, route or stop does not exist."""


class EmptySchedule(ScheduleError):
    """Raised when a trip exists but has no stop times."""


class InvalidState(ScheduleError):
    """Raised when a value cannot be used in its current state."""


class InvalidArgument(ScheduleError, ValueError):
    """Raised for malformed input or unknown options."""
