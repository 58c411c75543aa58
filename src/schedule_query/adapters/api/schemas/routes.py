from __future__ import annotations

from pydantic import BaseModel, Field


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class TransitRouteSchema(BaseModel):
    route_id: str
    agency_id: str | None = None
    short_name: str | None = None
    long_name: str | None = None
    color: str | None = None
    text_color: str | None = None


class TripSchema(BaseModel):
    trip_id: str
    route_id: str
    service_id: str | None = None
    name: str = ""
    short_name: str | None = None
    headsign: str | None = None
    shape_id: str | None = None


class StopTimeSchema(BaseModel):
    trip_id: str
    stop_id: str
    stop_sequence: int
    arrival_time: str
    departure_time: str | None = None


class ScheduleRangeSchema(BaseModel):
    start: str
    end: str
    duration_s: float


class TripScheduleSchema(BaseModel):
    trip_id: str
    range: ScheduleRangeSchema | None = None
    stop_times: list[StopTimeSchema]


class TripEndpointsSchema(BaseModel):
    trip_id: str
    first_stop_id: str
    last_stop_id: str


class SiblingTripsSchema(BaseModel):
    previous: TripSchema | None = None
    following: TripSchema | None = None


class NextStopSchema(BaseModel):
    at: str
    stop_time: StopTimeSchema | None = None
