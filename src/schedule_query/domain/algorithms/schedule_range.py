from __future__ import annotations

from typing import Iterable

from schedule_query.domain.exceptions import EmptySchedule
from schedule_query.domain.models.gtfs import StopTime
from schedule_query.domain.models.schedule import ScheduleRange


def schedule_range(stop_times: Iterable[StopTime]) -> ScheduleRange:
    """Return the earliest and latest arrival across a trip's stop times.

    Input order does not matter. Raises EmptySchedule when there are no
    stop times, which callers treat as "no timetable" rather than a
    zero-length range.
    """

    arrivals = [st.arrival_time for st in stop_times]
    if not arrivals:
        raise EmptySchedule("Trip has no stop times")
    return ScheduleRange(start=min(arrivals), end=max(arrivals))


def by_sequence(stop_times: Iterable[StopTime]) -> list[StopTime]:
    return sorted(stop_times, key=lambda st: st.stop_sequence)


def first_and_last_key(keys: Iterable[str]) -> tuple[str, str] | None:
    """Smallest and largest stop-time key, compared as strings.

    The key encoder zero-pads the stop sequence, so string order is
    sequence order.
    """

    ordered = sorted(keys)
    if not ordered:
        return None
    return ordered[0], ordered[-1]
