from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint
from .time_of_day import TimeOfDay
from .weekdays import WeekdaySet


@dataclass(frozen=True, slots=True)
class StopTime:
    """One scheduled visit of a trip to a stop.

    Times are service-day times (GTFS semantics; may exceed 24h).
    """

    trip_id: str
    stop_id: str
    stop_sequence: int
    arrival_time: TimeOfDay
    departure_time: TimeOfDay | None = None


@dataclass(frozen=True, slots=True)
class GtfsRoute:
    route_id: str
    agency_id: str | None = None
    short_name: str | None = None
    long_name: str | None = None
    color: str | None = None  # hex without '#'
    text_color: str | None = None  # hex without '#'


@dataclass(frozen=True, slots=True)
class GtfsTrip:
    trip_id: str
    route_id: str
    service_id: str | None = None
    short_name: str | None = None
    headsign: str | None = None
    shape_id: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        # trip_id alone is not unique across routes.
        return (self.route_id, self.trip_id)

    @property
    def display_name(self) -> str:
        return self.short_name or self.headsign or ""


@dataclass(frozen=True, slots=True)
class Agency:
    name: str
    url: str
    timezone: str
    agency_id: str | None = None
    lang: str | None = None
    phone: str | None = None


@dataclass(frozen=True, slots=True)
class Calendar:
    service_id: str
    monday: bool
    tuesday: bool
    wednesday: bool
    thursday: bool
    friday: bool
    saturday: bool
    sunday: bool
    start_date: str | None = None  # YYYYMMDD
    end_date: str | None = None  # YYYYMMDD

    def weekdays(self) -> WeekdaySet:
        return WeekdaySet.from_flags(
            sunday=self.sunday,
            monday=self.monday,
            tuesday=self.tuesday,
            wednesday=self.wednesday,
            thursday=self.thursday,
            friday=self.friday,
            saturday=self.saturday,
        )


@dataclass(frozen=True, slots=True)
class CalendarDate:
    service_id: str
    date: str  # YYYYMMDD
    exception_type: int  # 1 = service added, 2 = service removed

    @property
    def service_added(self) -> bool:
        return self.exception_type == 1


@dataclass(frozen=True, slots=True)
class ShapePoint:
    shape_id: str
    sequence: int
    location: GeoPoint
    dist_traveled: float | None = None
