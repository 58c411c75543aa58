from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from schedule_query.adapters.persistence import LocalGtfsLoader
from schedule_query.app.services.calendar_service import CalendarService
from schedule_query.app.services.network_service import NetworkService
from schedule_query.app.services.stop_service import StopService
from schedule_query.app.services.trip_schedule_service import TripScheduleService
from schedule_query.domain.models import GeoPoint, TimeOfDay


def _write(base: Path, name: str, text: str) -> None:
    (base / name).write_text(text.strip() + "\n", encoding="utf-8")


@pytest.fixture
def gtfs_dir(tmp_path: Path) -> Path:
    _write(
        tmp_path,
        "agency.txt",
        """
agency_name,agency_url,agency_timezone
Hele-On,heleonbus.com,Pacific/Honolulu
""",
    )
    _write(
        tmp_path,
        "routes.txt",
        """
route_id,route_short_name,route_long_name
R1,1,Downtown - Airport
""",
    )
    _write(
        tmp_path,
        "trips.txt",
        """
route_id,service_id,trip_id,trip_headsign
R1,WK,T1,Airport
R1,WK,T2,Airport Late
""",
    )
    _write(
        tmp_path,
        "stop_times.txt",
        """
trip_id,arrival_time,departure_time,stop_id,stop_sequence
T1,08:00:00,08:00:00,S1,1
T1,08:20:00,08:20:00,S2,2
T2,23:50:00,23:50:00,S1,1
T2, 25:10:00 ,25:10:00,S2,10
T2,bogus,bogus,S2,11
""",
    )
    _write(
        tmp_path,
        "stops.txt",
        """
stop_id,stop_name,stop_lat,stop_lon
S1,Downtown,19.7297,-155.0900
S2,Airport,19.7203,-155.0485
""",
    )
    _write(
        tmp_path,
        "calendar.txt",
        """
service_id,monday,tuesday,wednesday,thursday,friday,saturday,sunday,start_date,end_date
WK,1,1,1,1,1,0,0,20260101,20261231
""",
    )
    _write(
        tmp_path,
        "shapes.txt",
        """
shape_id,shape_pt_lat,shape_pt_lon,shape_pt_sequence
SH1,19.72,-155.05,2
SH1,19.73,-155.09,1
""",
    )
    return tmp_path


def test_loader_fills_stores(gtfs_dir: Path) -> None:
    stores = LocalGtfsLoader(base_path=gtfs_dir).load()

    assert len(stores.trips) == 2
    assert len(stores.stops) == 2
    # The malformed stop time row is skipped.
    assert len(stores.stop_times) == 4
    assert len(stores.calendar_dates) == 0


def test_loaded_feed_answers_schedule_queries(gtfs_dir: Path) -> None:
    stores = LocalGtfsLoader(base_path=gtfs_dir).load()
    trips = TripScheduleService(trip_store=stores.trips, stop_time_store=stores.stop_times)

    late = asyncio.run(trips.trip_times(trip_id="T2"))
    assert late.end == TimeOfDay.of(25, 10)

    current = asyncio.run(trips.current_trip(route_id="R1", now="08:05:00"))
    assert current.trip_id == "T1"
    assert current.headsign == "Airport"

    endpoints = asyncio.run(trips.first_and_last_stop(trip_id="T2"))
    assert endpoints is not None
    assert (endpoints.first_stop_id, endpoints.last_stop_id) == ("S1", "S2")


def test_loaded_feed_answers_stop_calendar_and_network_queries(gtfs_dir: Path) -> None:
    stores = LocalGtfsLoader(base_path=gtfs_dir).load()

    stop = asyncio.run(
        StopService(stop_store=stores.stops).nearest_stop(point=GeoPoint(19.721, -155.05))
    )
    assert stop is not None and stop.name == "Airport"

    calendar = CalendarService(
        calendar_store=stores.calendars, calendar_date_store=stores.calendar_dates
    )
    assert asyncio.run(calendar.service_days_label(service_id="WK", style="short")) == "Mon - Fri"

    network = NetworkService(
        agency_store=stores.agencies, route_store=stores.routes, shape_store=stores.shapes
    )
    assert asyncio.run(network.get_agency()).name == "Hele-On"
    assert asyncio.run(network.get_route(route_id="R1")).long_name == "Downtown - Airport"
    points = asyncio.run(network.shape_points(shape_id="SH1"))
    assert [p.sequence for p in points] == [1, 2]


def test_loader_requires_core_files(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        LocalGtfsLoader(base_path=tmp_path).load()


def test_loader_reads_gtfs_path_from_env(gtfs_dir: Path, monkeypatch) -> None:
    monkeypatch.setenv("GTFS_PATH", str(gtfs_dir))
    stores = LocalGtfsLoader().load()
    assert len(stores.routes) == 1
