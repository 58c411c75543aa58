from .schedule import (
    EmptySchedule,
    InvalidArgument,
    InvalidState,
    NotFound,
    ScheduleError,
)

__all__ = [
    "EmptySchedule",
    "InvalidArgument",
    "InvalidState",
    "NotFound",
    "ScheduleError",
]
