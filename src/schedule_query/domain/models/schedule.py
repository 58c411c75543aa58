from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from schedule_query.domain.exceptions import InvalidArgument

from .time_of_day import TimeOfDay


@dataclass(frozen=True, slots=True)
class ScheduleRange:
    """Earliest and latest arrival of one trip.

    Values are raw service-day times; an end past 24:00:00 is not wrapped.
    """

    start: TimeOfDay
    end: TimeOfDay

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise InvalidArgument(f"Range ends before it starts: {self.start}-{self.end}")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def contains(self, t: TimeOfDay) -> bool:
        return self.start <= t <= self.end

    def overlaps(self, other: ScheduleRange) -> bool:
        return self.start <= other.end and other.start <= self.end

    def ends_before(self, other: ScheduleRange) -> bool:
        """True when this range is over strictly before `other` starts."""

        return self.end < other.start

    def starts_after(self, other: ScheduleRange) -> bool:
        return self.start > other.end
