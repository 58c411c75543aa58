from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta

from schedule_query.domain.exceptions import InvalidArgument

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE


@dataclass(frozen=True, slots=True, order=True)
class TimeOfDay:
    """A time relative to service-day midnight, with no calendar date.

    Stored as milliseconds since midnight. GTFS times may exceed 24:00:00 for
    trips that continue past midnight; those values are kept as-is.
    """

    ms: int

    def __post_init__(self) -> None:
        if self.ms < 0:
            raise InvalidArgument(f"Negative time of day: {self.ms}ms")

    @staticmethod
    def of(hour: int, minute: int = 0, second: int = 0, millisecond: int = 0) -> "TimeOfDay":
        return TimeOfDay(
            hour * _MS_PER_HOUR
            + minute * _MS_PER_MINUTE
            + second * _MS_PER_SECOND
            + millisecond
        )

    @staticmethod
    def parse(raw: str) -> "TimeOfDay":
        """Parse a GTFS `H:MM:SS` (or `H:MM`) string.

        Hours above 23 are allowed and are not wrapped into the next day.
        """

        parts = (raw or "").strip().split(":")
        if len(parts) not in (2, 3):
            raise InvalidArgument(f"Invalid time of day: {raw!r}")
        try:
            hh, mm = int(parts[0]), int(parts[1])
            ss = int(parts[2]) if len(parts) == 3 else 0
        except ValueError as exc:
            raise InvalidArgument(f"Invalid time of day: {raw!r}") from exc
        if hh < 0 or not (0 <= mm < 60) or not (0 <= ss < 60):
            raise InvalidArgument(f"Invalid time of day: {raw!r}")
        return TimeOfDay.of(hh, mm, ss)

    @staticmethod
    def from_datetime(value: datetime | time) -> "TimeOfDay":
        # Drops the date; only the clock fields survive.
        return TimeOfDay.of(
            value.hour, value.minute, value.second, value.microsecond // 1000
        )

    @staticmethod
    def now() -> "TimeOfDay":
        return TimeOfDay.from_datetime(datetime.now())

    @staticmethod
    def coerce(value: "TimeOfDay | datetime | time | str | None") -> "TimeOfDay":
        """Normalise a reference time; `None` means the current wall-clock time."""

        if value is None:
            return TimeOfDay.now()
        if isinstance(value, TimeOfDay):
            return value
        if isinstance(value, str):
            return TimeOfDay.parse(value)
        return TimeOfDay.from_datetime(value)

    @property
    def hour(self) -> int:
        return self.ms // _MS_PER_HOUR

    @property
    def minute(self) -> int:
        return (self.ms % _MS_PER_HOUR) // _MS_PER_MINUTE

    @property
    def second(self) -> int:
        return (self.ms % _MS_PER_MINUTE) // _MS_PER_SECOND

    @property
    def millisecond(self) -> int:
        return self.ms % _MS_PER_SECOND

    @property
    def seconds(self) -> int:
        """Whole seconds since service-day midnight."""

        return self.ms // _MS_PER_SECOND

    def __sub__(self, other: "TimeOfDay") -> timedelta:
        if not isinstance(other, TimeOfDay):
            return NotImplemented
        return timedelta(milliseconds=self.ms - other.ms)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
