from __future__ import annotations

import asyncio

import pytest

from schedule_query.adapters.persistence import InMemoryDocumentStore
from schedule_query.app.ports.output import document_keys as keys
from schedule_query.app.services.trip_schedule_service import TripScheduleService
from schedule_query.domain.algorithms.current_trip import pick_current_trip
from schedule_query.domain.exceptions import NotFound
from schedule_query.domain.models import ScheduleRange, TimeOfDay


def _rng(start: str, end: str) -> ScheduleRange:
    return ScheduleRange(TimeOfDay.parse(start), TimeOfDay.parse(end))


def test_running_trip_is_selected() -> None:
    candidates = [
        ("A", _rng("09:00:00", "09:30:00")),
        ("B", _rng("10:00:00", "10:30:00")),
    ]
    assert pick_current_trip(candidates, now=TimeOfDay.of(10, 5)) == "B"


def test_fallback_is_first_in_enumeration_order() -> None:
    candidates = [
        ("B", _rng("10:00:00", "10:30:00")),
        ("A", _rng("09:00:00", "09:30:00")),
    ]
    # Nothing runs at noon; B is first in the given order, not A by start time.
    assert pick_current_trip(candidates, now=TimeOfDay.of(12)) == "B"


def test_earliest_start_wins_among_running_trips() -> None:
    candidates = [
        ("late", _rng("09:00:00", "11:00:00")),
        ("early", _rng("08:00:00", "10:00:00")),
    ]
    assert pick_current_trip(candidates, now=TimeOfDay.of(9, 30)) == "early"


def test_equal_starts_break_by_lowest_trip_id() -> None:
    candidates = [
        ("X", _rng("09:00:00", "10:00:00")),
        ("W", _rng("09:00:00", "11:00:00")),
    ]
    assert pick_current_trip(candidates, now=TimeOfDay.of(9, 30)) == "W"


def test_trips_without_schedule_never_match() -> None:
    candidates = [("A", None), ("B", _rng("09:00:00", "10:00:00"))]
    assert pick_current_trip(candidates, now=TimeOfDay.of(9)) == "B"
    assert pick_current_trip([], now=TimeOfDay.of(9)) is None


def test_service_returns_running_trip(three_trip_route) -> None:
    trip = asyncio.run(three_trip_route.current_trip(route_id="R1", now="09:10:00"))
    assert trip.trip_id == "B"
    assert trip.route_id == "R1"
    assert trip.display_name == "Headsign B"


def test_service_falls_back_to_first_trip_by_key(make_trip_service) -> None:
    service = make_trip_service(
        [("R1", "B"), ("R1", "A")],
        {"A": ["09:00:00", "09:30:00"], "B": ["10:00:00", "10:30:00"]},
    )
    # The store enumerates trip/R1/A before trip/R1/B.
    trip = asyncio.run(service.current_trip(route_id="R1", now="12:00:00"))
    assert trip.trip_id == "A"


def test_service_keeps_route_when_trip_ids_repeat(make_trip_service) -> None:
    service = make_trip_service(
        [("R1", "T1"), ("R2", "T1")],
        {"T1": ["09:00:00", "09:30:00"]},
    )
    trip = asyncio.run(service.current_trip(route_id="R2", now="09:10:00"))
    assert trip.key == ("R2", "T1")


def test_service_route_without_trips_is_not_found(three_trip_route) -> None:
    with pytest.raises(NotFound):
        asyncio.run(three_trip_route.current_trip(route_id="R9", now="09:00:00"))


def test_get_trip_without_route_scans_trip_keys(three_trip_route) -> None:
    trip = asyncio.run(three_trip_route.get_trip(trip_id="C"))
    assert trip.key == ("R1", "C")

    with pytest.raises(NotFound):
        asyncio.run(three_trip_route.get_trip(trip_id="missing"))


def test_trips_for_route_follow_key_order(three_trip_route) -> None:
    trips = asyncio.run(three_trip_route.trips_for_route(route_id="R1"))
    assert [t.trip_id for t in trips] == ["A", "B", "C"]
    assert asyncio.run(three_trip_route.trips_for_route(route_id="R9")) == ()


class _StoreDown(RuntimeError):
    pass


class _FailingStopTimes(InMemoryDocumentStore):
    """Stop-time store whose range reads for trip B fail."""

    async def get_range(self, start_key, end_key, **kwargs):
        if start_key.startswith(keys.stop_times_of_trip_prefix("B")):
            raise _StoreDown("stop_times unavailable")
        return await super().get_range(start_key, end_key, **kwargs)


@pytest.fixture
def route_with_failing_trip(three_trip_route, stop_time_items) -> TripScheduleService:
    stop_times = _FailingStopTimes(name="stop_times")
    for trip_id, arrivals in (
        ("A", ["08:00:00", "08:30:00"]),
        ("B", ["09:00:00", "09:30:00"]),
        ("C", ["10:00:00", "10:30:00"]),
    ):
        stop_times.put_many(stop_time_items(trip_id, arrivals))
    return TripScheduleService(
        trip_store=three_trip_route.trip_store, stop_time_store=stop_times
    )


def test_failed_trip_fetch_aborts_route_queries(route_with_failing_trip) -> None:
    service = route_with_failing_trip
    trip_a = asyncio.run(service.get_trip(trip_id="A", route_id="R1"))

    with pytest.raises(_StoreDown):
        asyncio.run(service.current_trip(route_id="R1", now="08:10:00"))
    with pytest.raises(_StoreDown):
        asyncio.run(service.next_stop_of_route(route_id="R1", now="07:00:00"))
    with pytest.raises(_StoreDown):
        asyncio.run(service.sibling_trips(trip=trip_a))


def test_get_stop_time_by_trip_and_sequence(three_trip_route) -> None:
    stop_time = asyncio.run(three_trip_route.get_stop_time(trip_id="B", stop_sequence=2))
    assert stop_time.stop_id == "B-S2"
    assert str(stop_time.arrival_time) == "09:15:00"

    same = asyncio.run(
        three_trip_route.get_stop_time(trip_id="B", stop_sequence=2, stop_id="B-S2")
    )
    assert same == stop_time

    with pytest.raises(NotFound):
        asyncio.run(three_trip_route.get_stop_time(trip_id="B", stop_sequence=2, stop_id="X"))
    with pytest.raises(NotFound):
        asyncio.run(three_trip_route.get_stop_time(trip_id="B", stop_sequence=9))
