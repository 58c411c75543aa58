from __future__ import annotations

from typing import Any

from schedule_query.app.ports.output import Document
from schedule_query.domain.exceptions import InvalidArgument
from schedule_query.domain.models import (
    Agency,
    Calendar,
    CalendarDate,
    GeoPoint,
    GtfsRoute,
    GtfsTrip,
    ShapePoint,
    Stop,
    StopTime,
    TimeOfDay,
)

# Field projection used for coordinate-only stop scans.
STOP_LOCATION_FIELDS = ("stop_lat", "stop_lon")


def _opt(doc: Document, name: str) -> str | None:
    value = doc.get(name)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _req(doc: Document, name: str) -> Any:
    try:
        return doc[name]
    except KeyError as exc:
        raise InvalidArgument(f"Document is missing {name!r}") from exc


def _flag(doc: Document, name: str) -> bool:
    value = doc.get(name)
    if isinstance(value, str):
        return value.strip() == "1"
    return bool(value)


def location_from_doc(doc: Document) -> GeoPoint:
    try:
        return GeoPoint(lat=float(_req(doc, "stop_lat")), lon=float(_req(doc, "stop_lon")))
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"Bad stop coordinates: {exc}") from exc


def stop_from_doc(doc: Document) -> Stop:
    stop_id = str(_req(doc, "stop_id"))
    return Stop(
        id=stop_id,
        name=_opt(doc, "stop_name") or stop_id,
        location=location_from_doc(doc),
        code=_opt(doc, "stop_code"),
        description=_opt(doc, "stop_desc"),
    )


def stop_time_from_doc(doc: Document) -> StopTime:
    departure = _opt(doc, "departure_time")
    return StopTime(
        trip_id=str(_req(doc, "trip_id")),
        stop_id=str(_req(doc, "stop_id")),
        stop_sequence=int(_req(doc, "stop_sequence")),
        arrival_time=TimeOfDay.parse(str(_req(doc, "arrival_time"))),
        departure_time=TimeOfDay.parse(departure) if departure else None,
    )


def trip_from_doc(doc: Document) -> GtfsTrip:
    return GtfsTrip(
        trip_id=str(_req(doc, "trip_id")),
        route_id=str(_req(doc, "route_id")),
        service_id=_opt(doc, "service_id"),
        short_name=_opt(doc, "trip_short_name"),
        headsign=_opt(doc, "trip_headsign"),
        shape_id=_opt(doc, "shape_id"),
    )


def route_from_doc(doc: Document) -> GtfsRoute:
    return GtfsRoute(
        route_id=str(_req(doc, "route_id")),
        agency_id=_opt(doc, "agency_id"),
        short_name=_opt(doc, "route_short_name"),
        long_name=_opt(doc, "route_long_name"),
        color=_opt(doc, "route_color"),
        text_color=_opt(doc, "route_text_color"),
    )


def agency_from_doc(doc: Document) -> Agency:
    return Agency(
        name=str(_req(doc, "agency_name")),
        url=str(_req(doc, "agency_url")),
        timezone=str(_req(doc, "agency_timezone")),
        agency_id=_opt(doc, "agency_id"),
        lang=_opt(doc, "agency_lang"),
        phone=_opt(doc, "agency_phone"),
    )


def calendar_from_doc(doc: Document) -> Calendar:
    return Calendar(
        service_id=str(_req(doc, "service_id")),
        monday=_flag(doc, "monday"),
        tuesday=_flag(doc, "tuesday"),
        wednesday=_flag(doc, "wednesday"),
        thursday=_flag(doc, "thursday"),
        friday=_flag(doc, "friday"),
        saturday=_flag(doc, "saturday"),
        sunday=_flag(doc, "sunday"),
        start_date=_opt(doc, "start_date"),
        end_date=_opt(doc, "end_date"),
    )


def calendar_date_from_doc(doc: Document) -> CalendarDate:
    return CalendarDate(
        service_id=str(_req(doc, "service_id")),
        date=str(_req(doc, "date")),
        exception_type=int(_req(doc, "exception_type")),
    )


def shape_point_from_doc(doc: Document) -> ShapePoint:
    dist = doc.get("shape_dist_traveled")
    return ShapePoint(
        shape_id=str(_req(doc, "shape_id")),
        sequence=int(_req(doc, "shape_pt_sequence")),
        location=GeoPoint(
            lat=float(_req(doc, "shape_pt_lat")), lon=float(_req(doc, "shape_pt_lon"))
        ),
        dist_traveled=float(dist) if dist not in (None, "") else None,
    )
