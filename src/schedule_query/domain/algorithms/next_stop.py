from __future__ import annotations

from typing import Iterable

from schedule_query.domain.models.gtfs import StopTime
from schedule_query.domain.models.time_of_day import TimeOfDay


def next_stop_from_list(
    stop_times: Iterable[StopTime], *, now: TimeOfDay
) -> StopTime | None:
    """Return the stop time with the earliest arrival at or after `now`.

    On equal arrivals the first one in iteration order wins. Returns None
    once every arrival is in the past (the trip is done for the day).
    """

    closest: StopTime | None = None
    for st in stop_times:
        if st.arrival_time < now:
            continue
        if closest is None or st.arrival_time < closest.arrival_time:
            closest = st
    return closest
