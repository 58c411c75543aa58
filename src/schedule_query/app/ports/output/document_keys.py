"""Storage keys for schedule documents.

Every collection is key-ordered, so keys are laid out to make the common
queries prefix scans: all trips of a route, all stop times of a trip, all
points of a shape. Id components are percent-encoded so that a '/' inside an
id cannot break the layout, and sequence numbers are zero-padded so that
string order equals numeric order.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote, unquote

from schedule_query.domain.exceptions import InvalidArgument

SEQUENCE_WIDTH = 10
HIGH_SENTINEL = "\uffff"


def _enc(component: str) -> str:
    return quote(str(component), safe="")


def _seq(value: int) -> str:
    value = int(value)
    if value < 0 or len(str(value)) > SEQUENCE_WIDTH:
        raise InvalidArgument(f"Sequence out of range: {value}")
    return str(value).zfill(SEQUENCE_WIDTH)


def prefix_range(prefix: str) -> tuple[str, str]:
    """Inclusive (start, end) bounds covering every key under `prefix`."""

    return prefix, prefix + HIGH_SENTINEL


@dataclass(frozen=True, slots=True)
class TripKey:
    route_id: str
    trip_id: str


def trip_key(route_id: str, trip_id: str) -> str:
    return f"trip/{_enc(route_id)}/{_enc(trip_id)}"


def trips_of_route_prefix(route_id: str) -> str:
    return f"trip/{_enc(route_id)}/"


def all_trips_prefix() -> str:
    return "trip/"


def parse_trip_key(key: str) -> TripKey:
    parts = key.split("/")
    if len(parts) != 3 or parts[0] != "trip":
        raise InvalidArgument(f"Not a trip key: {key!r}")
    return TripKey(route_id=unquote(parts[1]), trip_id=unquote(parts[2]))


def stop_time_key(trip_id: str, stop_sequence: int) -> str:
    return f"time/{_enc(trip_id)}/{_seq(stop_sequence)}"


def stop_times_of_trip_prefix(trip_id: str) -> str:
    return f"time/{_enc(trip_id)}/"


def stop_key(stop_id: str) -> str:
    return f"stop/{_enc(stop_id)}"


def route_key(route_id: str) -> str:
    return f"route/{_enc(route_id)}"


def agency_key(agency_id: str) -> str:
    return f"agency/{_enc(agency_id)}"


def calendar_key(service_id: str) -> str:
    return f"calendar/{_enc(service_id)}"


def calendar_date_key(service_id: str, date: str) -> str:
    return f"date/{_enc(service_id)}/{_enc(date)}"


def shape_point_key(shape_id: str, sequence: int) -> str:
    return f"shape/{_enc(shape_id)}/{_seq(sequence)}"


def shape_points_prefix(shape_id: str) -> str:
    return f"shape/{_enc(shape_id)}/"
