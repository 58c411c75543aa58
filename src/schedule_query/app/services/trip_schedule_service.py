from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime

from schedule_query.app.ports.output import IDocumentStore
from schedule_query.app.ports.output.document_keys import (
    TripKey,
    all_trips_prefix,
    parse_trip_key,
    prefix_range,
    stop_time_key,
    stop_times_of_trip_prefix,
    trip_key,
    trips_of_route_prefix,
)
from schedule_query.domain.algorithms.current_trip import pick_current_trip
from schedule_query.domain.algorithms.next_stop import next_stop_from_list
from schedule_query.domain.algorithms.schedule_range import (
    by_sequence,
    first_and_last_key,
    schedule_range,
)
from schedule_query.domain.algorithms.sibling_trips import Siblings, pick_siblings
from schedule_query.domain.exceptions import EmptySchedule, NotFound
from schedule_query.domain.models import GtfsTrip, ScheduleRange, StopTime, TimeOfDay

from .documents import stop_time_from_doc, trip_from_doc

ReferenceTime = TimeOfDay | datetime | str | None


@dataclass(frozen=True, slots=True)
class TripEndpoints:
    first_stop_id: str
    last_stop_id: str


@dataclass(slots=True)
class TripScheduleService:
    """Time-of-day queries over trips and their stop times.

    Per-trip fetches fan out with asyncio.gather and are joined before any
    reduction; a failing fetch fails the whole query.
    """

    trip_store: IDocumentStore
    stop_time_store: IDocumentStore

    async def _route_trip_keys(self, route_id: str) -> list[TripKey]:
        start, end = prefix_range(trips_of_route_prefix(route_id))
        rows = await self.trip_store.get_range(start, end)
        return [parse_trip_key(row.key) for row in rows]

    async def trips_for_route(self, *, route_id: str) -> tuple[GtfsTrip, ...]:
        start, end = prefix_range(trips_of_route_prefix(route_id))
        rows = await self.trip_store.get_range(start, end, include_docs=True)
        return tuple(trip_from_doc(row.doc) for row in rows if row.doc is not None)

    async def get_trip(self, *, trip_id: str, route_id: str | None = None) -> GtfsTrip:
        """Look up a trip; knowing the route turns a scan into a direct fetch."""

        if route_id is not None:
            return trip_from_doc(await self.trip_store.get_by_key(trip_key(route_id, trip_id)))

        start, end = prefix_range(all_trips_prefix())
        for row in await self.trip_store.get_range(start, end):
            if parse_trip_key(row.key).trip_id == trip_id:
                return trip_from_doc(await self.trip_store.get_by_key(row.key))
        raise NotFound(f"Trip {trip_id!r} not found")

    async def trip_schedule(self, *, trip_id: str) -> tuple[StopTime, ...]:
        """Stop times of a trip in stop_sequence order (empty if none)."""

        start, end = prefix_range(stop_times_of_trip_prefix(trip_id))
        rows = await self.stop_time_store.get_range(start, end, include_docs=True)
        return tuple(
            by_sequence(stop_time_from_doc(row.doc) for row in rows if row.doc is not None)
        )

    async def get_stop_time(
        self, *, trip_id: str, stop_sequence: int, stop_id: str | None = None
    ) -> StopTime:
        """A single stop time; `stop_id`, when given, must match the stored one."""

        stop_time = stop_time_from_doc(
            await self.stop_time_store.get_by_key(stop_time_key(trip_id, stop_sequence))
        )
        if stop_id is not None and stop_time.stop_id != stop_id:
            raise NotFound(
                f"Trip {trip_id!r} has no stop {stop_id!r} at sequence {stop_sequence}"
            )
        return stop_time

    async def trip_times(self, *, trip_id: str) -> ScheduleRange:
        """Raises EmptySchedule when the trip has no stop times."""

        return schedule_range(await self.trip_schedule(trip_id=trip_id))

    async def _trip_times_or_none(self, trip_id: str) -> ScheduleRange | None:
        try:
            return await self.trip_times(trip_id=trip_id)
        except EmptySchedule:
            return None

    async def first_and_last_stop(self, *, trip_id: str) -> TripEndpoints | None:
        start, end = prefix_range(stop_times_of_trip_prefix(trip_id))
        rows = await self.stop_time_store.get_range(start, end)

        bounds = first_and_last_key(row.key for row in rows)
        if bounds is None:
            return None

        first, last = await asyncio.gather(
            self.stop_time_store.get_by_key(bounds[0]),
            self.stop_time_store.get_by_key(bounds[1]),
        )
        return TripEndpoints(
            first_stop_id=str(first["stop_id"]), last_stop_id=str(last["stop_id"])
        )

    async def next_stop_of_trip(
        self, *, trip_id: str, now: ReferenceTime = None
    ) -> StopTime | None:
        now_t = TimeOfDay.coerce(now)
        return next_stop_from_list(await self.trip_schedule(trip_id=trip_id), now=now_t)

    async def next_stop_of_route(
        self, *, route_id: str, now: ReferenceTime = None
    ) -> StopTime | None:
        """Next stop across every trip of a route.

        Schedules are concatenated in trip key order before the scan, so the
        first-wins tie-break follows the route's trip enumeration.
        """

        now_t = TimeOfDay.coerce(now)
        keys = await self._route_trip_keys(route_id)
        schedules = await asyncio.gather(
            *(self.trip_schedule(trip_id=k.trip_id) for k in keys)
        )
        merged = [st for schedule in schedules for st in schedule]
        return next_stop_from_list(merged, now=now_t)

    async def current_trip(self, *, route_id: str, now: ReferenceTime = None) -> GtfsTrip:
        """The trip running at `now` on a route.

        Falls back to the first trip in key order when none is running.
        Raises NotFound for a route without trips.
        """

        now_t = TimeOfDay.coerce(now)
        keys = await self._route_trip_keys(route_id)
        if not keys:
            raise NotFound(f"Route {route_id!r} has no trips")

        ranges = await asyncio.gather(*(self._trip_times_or_none(k.trip_id) for k in keys))
        winner = pick_current_trip(
            [(k.trip_id, rng) for k, rng in zip(keys, ranges)], now=now_t
        )
        if winner is None:
            raise NotFound(f"Route {route_id!r} has no trips")
        return await self.get_trip(trip_id=winner, route_id=route_id)

    async def sibling_trips(self, *, trip: GtfsTrip) -> Siblings[GtfsTrip]:
        subject, route_trips = await asyncio.gather(
            self._trip_times_or_none(trip.trip_id),
            self.trips_for_route(route_id=trip.route_id),
        )
        if subject is None:
            return Siblings()

        others = [t for t in route_trips if t.key != trip.key]
        ranges = await asyncio.gather(*(self._trip_times_or_none(t.trip_id) for t in others))
        return pick_siblings(
            subject, [(t.trip_id, t, rng) for t, rng in zip(others, ranges)]
        )
