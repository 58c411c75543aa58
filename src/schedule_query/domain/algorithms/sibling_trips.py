from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, TypeVar

from schedule_query.domain.models.schedule import ScheduleRange

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Siblings(Generic[T]):
    previous: T | None = None
    following: T | None = None


def pick_siblings(
    subject: ScheduleRange | None,
    others: Iterable[tuple[str, T, ScheduleRange | None]],
) -> Siblings[T]:
    """Find the trips immediately before and after `subject`.

    `others` holds (trip_id, trip, range) for every other trip of the route;
    the subject itself must already be excluded. Trips without a range and
    trips overlapping the subject are ignored.

    With nothing earlier, the previous trip is the latest-starting later
    trip (the last run of the prior service day). With nothing later, the
    following trip is the earliest-starting earlier trip (the first run of
    the next day). Ties go to the lowest trip_id.
    """

    if subject is None:
        return Siblings()

    before: list[tuple[str, T, ScheduleRange]] = []
    after: list[tuple[str, T, ScheduleRange]] = []
    for trip_id, trip, rng in others:
        if rng is None:
            continue
        if rng.ends_before(subject):
            before.append((trip_id, trip, rng))
        elif rng.starts_after(subject):
            after.append((trip_id, trip, rng))

    previous: T | None = None
    following: T | None = None

    if before:
        # Latest end; on equal ends the lowest trip_id.
        previous = min(before, key=lambda x: (-x[2].end.ms, x[0]))[1]
    elif after:
        previous = min(after, key=lambda x: (-x[2].start.ms, x[0]))[1]

    if after:
        following = min(after, key=lambda x: (x[2].start, x[0]))[1]
    elif before:
        following = min(before, key=lambda x: (x[2].start, x[0]))[1]

    return Siblings(previous=previous, following=following)
