from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterator

from schedule_query.domain.exceptions import InvalidArgument, InvalidState


class Weekday(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class DayNameStyle(str, Enum):
    NORMAL = "normal"  # Sunday, Monday, ...
    SHORT = "short"  # Sun, Mon, ...
    MIN = "min"  # Su, Mo, ...


_DAY_NAMES: dict[DayNameStyle, tuple[str, ...]] = {
    DayNameStyle.NORMAL: (
        "Sunday",
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
    ),
    DayNameStyle.SHORT: ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"),
    DayNameStyle.MIN: ("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"),
}

_ALL_DAYS = 0b1111111


def day_names(style: DayNameStyle | str = DayNameStyle.NORMAL) -> tuple[str, ...]:
    try:
        return _DAY_NAMES[DayNameStyle(style)]
    except ValueError as exc:
        raise InvalidArgument(f"Invalid day name style: {style!r}") from exc


@dataclass(frozen=True, slots=True)
class WeekdaySet:
    """Days of the week a service runs on, as a 7-bit mask (bit 0 = Sunday)."""

    mask: int = 0

    def __post_init__(self) -> None:
        if not (0 <= self.mask <= _ALL_DAYS):
            raise InvalidArgument(f"Invalid weekday mask: {self.mask}")

    @staticmethod
    def of(*days: int) -> "WeekdaySet":
        mask = 0
        for day in days:
            if not (0 <= int(day) <= 6):
                raise InvalidArgument(f"Invalid weekday: {day}")
            mask |= 1 << int(day)
        return WeekdaySet(mask)

    @staticmethod
    def from_flags(
        sunday: bool,
        monday: bool,
        tuesday: bool,
        wednesday: bool,
        thursday: bool,
        friday: bool,
        saturday: bool,
    ) -> "WeekdaySet":
        flags = (sunday, monday, tuesday, wednesday, thursday, friday, saturday)
        return WeekdaySet(sum(1 << i for i, on in enumerate(flags) if on))

    def __contains__(self, day: object) -> bool:
        if not isinstance(day, int) or not (0 <= day <= 6):
            return False
        return bool(self.mask & (1 << day))

    def __iter__(self) -> Iterator[Weekday]:
        # Always ascending by day number.
        return (Weekday(i) for i in range(7) if self.mask & (1 << i))

    def __len__(self) -> int:
        return bin(self.mask).count("1")

    def is_contiguous(self) -> bool:
        """True when the days form one uninterrupted ascending run (no week wrap)."""

        if not self.mask:
            return False
        low = self.mask & -self.mask
        run = self.mask // low
        return run & (run + 1) == 0

    def format(self, style: DayNameStyle | str = DayNameStyle.NORMAL) -> str:
        """Human label such as 'Daily', 'Monday Only', 'Mon - Fri' or 'Su & We'."""

        if not self.mask:
            raise InvalidState("Not active on any days")
        if self.mask == _ALL_DAYS:
            return "Daily"

        names = day_names(style)
        days = list(self)
        if len(days) == 1:
            return f"{names[days[0]]} Only"
        if self.is_contiguous():
            return f"{names[days[0]]} - {names[days[-1]]}"
        return " & ".join(names[d] for d in days)


def same_days(a: WeekdaySet, b: WeekdaySet) -> bool:
    if len(a) != len(b):
        return False
    return all(day in b for day in a)
