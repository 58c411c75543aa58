from __future__ import annotations

import pytest

from schedule_query.domain.exceptions import InvalidArgument, InvalidState
from schedule_query.domain.models.gtfs import Calendar
from schedule_query.domain.models.weekdays import (
    DayNameStyle,
    Weekday,
    WeekdaySet,
    same_days,
)


def test_from_flags_maps_one_bit_per_day() -> None:
    days = WeekdaySet.from_flags(
        sunday=True,
        monday=False,
        tuesday=True,
        wednesday=False,
        thursday=False,
        friday=False,
        saturday=True,
    )

    assert list(days) == [Weekday.SUNDAY, Weekday.TUESDAY, Weekday.SATURDAY]
    assert len(days) == 3
    assert Weekday.TUESDAY in days
    assert Weekday.MONDAY not in days


def test_calendar_entry_converts_to_weekdays() -> None:
    cal = Calendar(
        service_id="WK",
        monday=True,
        tuesday=True,
        wednesday=True,
        thursday=True,
        friday=True,
        saturday=False,
        sunday=False,
    )
    assert cal.weekdays() == WeekdaySet.of(1, 2, 3, 4, 5)


def test_all_seven_days_is_daily() -> None:
    assert WeekdaySet.of(*range(7)).format() == "Daily"


@pytest.mark.parametrize(
    ("style", "expected"),
    [
        ("normal", "Monday - Friday"),
        ("short", "Mon - Fri"),
        ("min", "Mo - Fr"),
        (DayNameStyle.SHORT, "Mon - Fri"),
    ],
)
def test_contiguous_run_formats_as_range(style: str, expected: str) -> None:
    assert WeekdaySet.of(1, 2, 3, 4, 5).format(style) == expected


def test_single_day_formats_as_only() -> None:
    assert WeekdaySet.of(6).format() == "Saturday Only"
    assert WeekdaySet.of(0).format("short") == "Sun Only"


def test_non_contiguous_days_are_joined_in_ascending_order() -> None:
    assert WeekdaySet.of(3, 0).format() == "Sunday & Wednesday"
    assert WeekdaySet.of(5, 1, 3).format("min") == "Mo & We & Fr"


def test_weekend_does_not_wrap_around_the_week() -> None:
    assert WeekdaySet.of(0, 6).format("short") == "Sun & Sat"


def test_empty_set_cannot_be_formatted() -> None:
    with pytest.raises(InvalidState):
        WeekdaySet().format()


def test_unknown_style_is_rejected() -> None:
    with pytest.raises(InvalidArgument):
        WeekdaySet.of(1, 2).format("tiny")


def test_invalid_day_number_is_rejected() -> None:
    with pytest.raises(InvalidArgument):
        WeekdaySet.of(7)


def test_contiguity() -> None:
    assert WeekdaySet.of(2, 3, 4).is_contiguous()
    assert not WeekdaySet.of(0, 2).is_contiguous()
    assert not WeekdaySet().is_contiguous()


def test_same_days() -> None:
    weekdays = WeekdaySet.of(1, 2, 3, 4, 5)
    also_weekdays = WeekdaySet.from_flags(False, True, True, True, True, True, False)
    weekend = WeekdaySet.of(0, 6)

    assert same_days(weekdays, weekdays)
    assert same_days(weekdays, also_weekdays)
    assert same_days(also_weekdays, weekdays)
    assert not same_days(weekdays, weekend)
    assert not same_days(WeekdaySet.of(1), WeekdaySet.of(1, 2))
    assert not same_days(WeekdaySet.of(1, 3), WeekdaySet.of(1, 2))
