from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from schedule_query.adapters.api.dependencies import (
    get_network_service,
    get_trip_schedule_service,
)
from schedule_query.adapters.api.schemas.routes import (
    NextStopSchema,
    ScheduleRangeSchema,
    SiblingTripsSchema,
    StopTimeSchema,
    TransitRouteSchema,
    TripEndpointsSchema,
    TripScheduleSchema,
    TripSchema,
)
from schedule_query.app.services.network_service import NetworkService
from schedule_query.app.services.trip_schedule_service import TripScheduleService
from schedule_query.domain.algorithms.schedule_range import schedule_range
from schedule_query.domain.exceptions import EmptySchedule
from schedule_query.domain.models import GtfsRoute, GtfsTrip, StopTime, TimeOfDay

router = APIRouter(tags=["routes"])


def _route_to_schema(r: GtfsRoute) -> TransitRouteSchema:
    return TransitRouteSchema(
        route_id=r.route_id,
        agency_id=r.agency_id,
        short_name=r.short_name,
        long_name=r.long_name,
        color=r.color,
        text_color=r.text_color,
    )


def _trip_to_schema(t: GtfsTrip) -> TripSchema:
    return TripSchema(
        trip_id=t.trip_id,
        route_id=t.route_id,
        service_id=t.service_id,
        name=t.display_name,
        short_name=t.short_name,
        headsign=t.headsign,
        shape_id=t.shape_id,
    )


def _stop_time_to_schema(st: StopTime | None) -> StopTimeSchema | None:
    if st is None:
        return None
    return StopTimeSchema(
        trip_id=st.trip_id,
        stop_id=st.stop_id,
        stop_sequence=st.stop_sequence,
        arrival_time=str(st.arrival_time),
        departure_time=str(st.departure_time) if st.departure_time else None,
    )


@router.get("/routes", response_model=list[TransitRouteSchema])
async def list_routes(
    service: NetworkService = Depends(get_network_service),
) -> list[TransitRouteSchema]:
    return [_route_to_schema(r) for r in await service.list_routes()]


@router.get("/routes/{route_id}", response_model=TransitRouteSchema)
async def get_route(
    route_id: str,
    service: NetworkService = Depends(get_network_service),
) -> TransitRouteSchema:
    return _route_to_schema(await service.get_route(route_id=route_id))


@router.get("/routes/{route_id}/trips", response_model=list[TripSchema])
async def list_trips(
    route_id: str,
    service: TripScheduleService = Depends(get_trip_schedule_service),
) -> list[TripSchema]:
    trips = await service.trips_for_route(route_id=route_id)
    return [_trip_to_schema(t) for t in trips]


@router.get("/routes/{route_id}/current-trip", response_model=TripSchema)
async def current_trip(
    route_id: str,
    at: str | None = Query(default=None, description="HH:MM:SS, defaults to now"),
    service: TripScheduleService = Depends(get_trip_schedule_service),
) -> TripSchema:
    return _trip_to_schema(await service.current_trip(route_id=route_id, now=at))


@router.get("/routes/{route_id}/next-stop", response_model=NextStopSchema)
async def next_stop_of_route(
    route_id: str,
    at: str | None = Query(default=None, description="HH:MM:SS, defaults to now"),
    service: TripScheduleService = Depends(get_trip_schedule_service),
) -> NextStopSchema:
    now = TimeOfDay.coerce(at)
    st = await service.next_stop_of_route(route_id=route_id, now=now)
    return NextStopSchema(at=str(now), stop_time=_stop_time_to_schema(st))


@router.get("/trips/{trip_id}", response_model=TripSchema)
async def get_trip(
    trip_id: str,
    service: TripScheduleService = Depends(get_trip_schedule_service),
) -> TripSchema:
    return _trip_to_schema(await service.get_trip(trip_id=trip_id))


@router.get("/routes/{route_id}/trips/{trip_id}/schedule", response_model=TripScheduleSchema)
async def trip_schedule(
    route_id: str,
    trip_id: str,
    service: TripScheduleService = Depends(get_trip_schedule_service),
) -> TripScheduleSchema:
    trip = await service.get_trip(trip_id=trip_id, route_id=route_id)
    stop_times = await service.trip_schedule(trip_id=trip.trip_id)

    rng_schema: ScheduleRangeSchema | None = None
    try:
        rng = schedule_range(stop_times)
        rng_schema = ScheduleRangeSchema(
            start=str(rng.start),
            end=str(rng.end),
            duration_s=rng.duration.total_seconds(),
        )
    except EmptySchedule:
        pass

    return TripScheduleSchema(
        trip_id=trip.trip_id,
        range=rng_schema,
        stop_times=[s for s in map(_stop_time_to_schema, stop_times) if s is not None],
    )


@router.get("/routes/{route_id}/trips/{trip_id}/next-stop", response_model=NextStopSchema)
async def next_stop_of_trip(
    route_id: str,
    trip_id: str,
    at: str | None = Query(default=None, description="HH:MM:SS, defaults to now"),
    service: TripScheduleService = Depends(get_trip_schedule_service),
) -> NextStopSchema:
    trip = await service.get_trip(trip_id=trip_id, route_id=route_id)
    now = TimeOfDay.coerce(at)
    st = await service.next_stop_of_trip(trip_id=trip.trip_id, now=now)
    return NextStopSchema(at=str(now), stop_time=_stop_time_to_schema(st))


@router.get("/routes/{route_id}/trips/{trip_id}/siblings", response_model=SiblingTripsSchema)
async def sibling_trips(
    route_id: str,
    trip_id: str,
    service: TripScheduleService = Depends(get_trip_schedule_service),
) -> SiblingTripsSchema:
    trip = await service.get_trip(trip_id=trip_id, route_id=route_id)
    siblings = await service.sibling_trips(trip=trip)
    return SiblingTripsSchema(
        previous=_trip_to_schema(siblings.previous) if siblings.previous else None,
        following=(
            _trip_to_schema(siblings.following) if siblings.following else None
        ),
    )


@router.get("/routes/{route_id}/trips/{trip_id}/endpoints", response_model=TripEndpointsSchema)
async def trip_endpoints(
    route_id: str,
    trip_id: str,
    service: TripScheduleService = Depends(get_trip_schedule_service),
) -> TripEndpointsSchema:
    trip = await service.get_trip(trip_id=trip_id, route_id=route_id)
    endpoints = await service.first_and_last_stop(trip_id=trip.trip_id)
    if endpoints is None:
        raise EmptySchedule(f"Trip {trip_id!r} has no stop times")
    return TripEndpointsSchema(
        trip_id=trip.trip_id,
        first_stop_id=endpoints.first_stop_id,
        last_stop_id=endpoints.last_stop_id,
    )
