from __future__ import annotations

from typing import Sequence

from schedule_query.domain.models.schedule import ScheduleRange
from schedule_query.domain.models.time_of_day import TimeOfDay


def pick_current_trip(
    candidates: Sequence[tuple[str, ScheduleRange | None]], *, now: TimeOfDay
) -> str | None:
    """Pick the trip running at `now` from (trip_id, range) pairs.

    Pairs must be in the route's enumeration order. A range of None means
    the trip has no stop times and never matches.

    Among running trips the earliest start wins, then the lowest trip_id.
    When nothing is running, the first enumerated trip is returned.
    Returns None only for an empty candidate list.
    """

    if not candidates:
        return None

    running = [
        (rng.start, trip_id)
        for trip_id, rng in candidates
        if rng is not None and rng.contains(now)
    ]
    if not running:
        return candidates[0][0]
    return min(running)[1]
