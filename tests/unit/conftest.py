from __future__ import annotations

from typing import Any, Callable

import pytest

from schedule_query.adapters.persistence import InMemoryDocumentStore
from schedule_query.app.ports.output import document_keys as keys
from schedule_query.app.services.trip_schedule_service import TripScheduleService

Schedules = dict[str, list[str]]


def stop_time_items(trip_id: str, arrivals: list[str]) -> list[tuple[str, dict[str, Any]]]:
    """Stop times with sequence 1..n and stop ids '<trip>-S<n>'."""

    return [
        (
            keys.stop_time_key(trip_id, seq),
            {
                "trip_id": trip_id,
                "stop_id": f"{trip_id}-S{seq}",
                "stop_sequence": seq,
                "arrival_time": arrival,
                "departure_time": arrival,
            },
        )
        for seq, arrival in enumerate(arrivals, start=1)
    ]


@pytest.fixture
def make_trip_service() -> Callable[..., TripScheduleService]:
    """Build a TripScheduleService over in-memory stores.

    `trips` is a list of (route_id, trip_id); `schedules` maps trip_id to its
    arrival times in stop order.
    """

    def _make(trips: list[tuple[str, str]], schedules: Schedules) -> TripScheduleService:
        trip_store = InMemoryDocumentStore.from_items(
            (
                (
                    keys.trip_key(route_id, trip_id),
                    {
                        "trip_id": trip_id,
                        "route_id": route_id,
                        "service_id": "WK",
                        "trip_headsign": f"Headsign {trip_id}",
                    },
                )
                for route_id, trip_id in trips
            ),
            name="trips",
        )
        stop_time_store = InMemoryDocumentStore(name="stop_times")
        for trip_id, arrivals in schedules.items():
            stop_time_store.put_many(stop_time_items(trip_id, arrivals))
        return TripScheduleService(trip_store=trip_store, stop_time_store=stop_time_store)

    return _make


@pytest.fixture
def three_trip_route(make_trip_service) -> TripScheduleService:
    # A 08:00-08:30, B 09:00-09:30, C 10:00-10:30 on route R1.
    return make_trip_service(
        [("R1", "A"), ("R1", "B"), ("R1", "C")],
        {
            "A": ["08:00:00", "08:15:00", "08:30:00"],
            "B": ["09:00:00", "09:15:00", "09:30:00"],
            "C": ["10:00:00", "10:15:00", "10:30:00"],
        },
    )


@pytest.fixture(name="stop_time_items")
def stop_time_items_fixture() -> Callable[[str, list[str]], list[tuple[str, dict[str, Any]]]]:
    return stop_time_items
