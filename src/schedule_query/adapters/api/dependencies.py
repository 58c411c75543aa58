from __future__ import annotations

from functools import lru_cache

from schedule_query.adapters.persistence import GtfsDocumentStores, LocalGtfsLoader
from schedule_query.adapters.settings import RuntimeConfig
from schedule_query.app.services.calendar_service import CalendarService
from schedule_query.app.services.network_service import NetworkService
from schedule_query.app.services.stop_service import StopService
from schedule_query.app.services.trip_schedule_service import TripScheduleService


@lru_cache(maxsize=1)
def get_stores() -> GtfsDocumentStores:
    # Loaded once per process; the feed is read-only.
    cfg = RuntimeConfig.from_env()
    return LocalGtfsLoader(base_path=cfg.gtfs_path).load()


def get_trip_schedule_service() -> TripScheduleService:
    stores = get_stores()
    return TripScheduleService(trip_store=stores.trips, stop_time_store=stores.stop_times)


def get_stop_service() -> StopService:
    return StopService(stop_store=get_stores().stops)


def get_calendar_service() -> CalendarService:
    stores = get_stores()
    return CalendarService(
        calendar_store=stores.calendars, calendar_date_store=stores.calendar_dates
    )


def get_network_service() -> NetworkService:
    stores = get_stores()
    return NetworkService(
        agency_store=stores.agencies,
        route_store=stores.routes,
        shape_store=stores.shapes,
    )
