from __future__ import annotations

import csv
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterator

from schedule_query.app.ports.output import document_keys as keys
from schedule_query.domain.models import TimeOfDay

from .in_memory_document_store import InMemoryDocumentStore

logger = logging.getLogger(__name__)

Row = dict[str, Any]


def _store(name: str) -> InMemoryDocumentStore:
    return InMemoryDocumentStore(name=name)


@dataclass(slots=True)
class GtfsDocumentStores:
    """One key-ordered store per GTFS collection."""

    agencies: InMemoryDocumentStore = field(default_factory=lambda: _store("agency"))
    routes: InMemoryDocumentStore = field(default_factory=lambda: _store("routes"))
    trips: InMemoryDocumentStore = field(default_factory=lambda: _store("trips"))
    stop_times: InMemoryDocumentStore = field(default_factory=lambda: _store("stop_times"))
    stops: InMemoryDocumentStore = field(default_factory=lambda: _store("stops"))
    calendars: InMemoryDocumentStore = field(default_factory=lambda: _store("calendar"))
    calendar_dates: InMemoryDocumentStore = field(
        default_factory=lambda: _store("calendar_dates")
    )
    shapes: InMemoryDocumentStore = field(default_factory=lambda: _store("shapes"))


def _clean(row: dict[str, str | None]) -> Row:
    # Feeds often pad values and headers with whitespace.
    out: Row = {}
    for k, v in row.items():
        if k is None:
            continue
        name = k.strip()
        value = (v or "").strip()
        if value:
            out[name] = value
    return out


def _read(path: Path) -> Iterator[Row]:
    with path.open("r", encoding="utf-8-sig", newline="") as fp:
        for row in csv.DictReader(fp):
            yield _clean(row)


@dataclass(slots=True)
class LocalGtfsLoader:
    """Loads a GTFS feed from a directory of .txt files into document stores.

    Env vars:
      - GTFS_PATH: directory containing stops.txt, trips.txt, stop_times.txt, ...

    Only trips.txt, stop_times.txt and stops.txt are required. Rows missing
    their key fields are skipped with a warning.
    """

    base_path: str | Path | None = None

    def _base(self) -> Path:
        value = self.base_path or os.getenv("GTFS_PATH") or "data/gtfs"
        return Path(value)

    def load(self) -> GtfsDocumentStores:
        base = self._base()
        stores = GtfsDocumentStores()

        self._load_file(base / "agency.txt", stores.agencies, _agency_item, required=False)
        self._load_file(base / "routes.txt", stores.routes, _route_item, required=False)
        self._load_file(base / "trips.txt", stores.trips, _trip_item)
        self._load_file(base / "stop_times.txt", stores.stop_times, _stop_time_item)
        self._load_file(base / "stops.txt", stores.stops, _stop_item)
        self._load_file(base / "calendar.txt", stores.calendars, _calendar_item, required=False)
        self._load_file(
            base / "calendar_dates.txt",
            stores.calendar_dates,
            _calendar_date_item,
            required=False,
        )
        self._load_file(base / "shapes.txt", stores.shapes, _shape_item, required=False)

        return stores

    def _load_file(
        self,
        path: Path,
        store: InMemoryDocumentStore,
        to_item: Callable[[Row], tuple[str, Row] | None],
        *,
        required: bool = True,
    ) -> None:
        if not path.exists():
            if required:
                raise FileNotFoundError(f"Missing GTFS file: {path}")
            logger.info("Optional GTFS file %s not present", path.name)
            return

        items: list[tuple[str, Row]] = []
        skipped = 0
        for row in _read(path):
            try:
                item = to_item(row)
            except (KeyError, ValueError) as exc:
                logger.warning("Skipping row in %s: %s", path.name, exc)
                item = None
            if item is None:
                skipped += 1
                continue
            items.append(item)

        store.put_many(items)
        logger.info("Loaded %d rows from %s (%d skipped)", len(store), path.name, skipped)


def _agency_item(row: Row) -> tuple[str, Row] | None:
    ident = row.get("agency_id") or row.get("agency_name")
    if not ident:
        return None
    return keys.agency_key(ident), row


def _route_item(row: Row) -> tuple[str, Row] | None:
    if "route_id" not in row:
        return None
    return keys.route_key(row["route_id"]), row


def _trip_item(row: Row) -> tuple[str, Row] | None:
    if "trip_id" not in row or "route_id" not in row:
        return None
    return keys.trip_key(row["route_id"], row["trip_id"]), row


def _stop_time_item(row: Row) -> tuple[str, Row] | None:
    if "trip_id" not in row or "stop_id" not in row or "arrival_time" not in row:
        return None
    row["stop_sequence"] = int(row.get("stop_sequence") or 0)
    # Validates the time now; values past 24:00:00 are kept verbatim.
    TimeOfDay.parse(row["arrival_time"])
    return keys.stop_time_key(row["trip_id"], row["stop_sequence"]), row


def _stop_item(row: Row) -> tuple[str, Row] | None:
    if "stop_id" not in row or "stop_lat" not in row or "stop_lon" not in row:
        return None
    row["stop_lat"] = float(row["stop_lat"])
    row["stop_lon"] = float(row["stop_lon"])
    return keys.stop_key(row["stop_id"]), row


def _calendar_item(row: Row) -> tuple[str, Row] | None:
    if "service_id" not in row:
        return None
    return keys.calendar_key(row["service_id"]), row


def _calendar_date_item(row: Row) -> tuple[str, Row] | None:
    if "service_id" not in row or "date" not in row:
        return None
    row["exception_type"] = int(row["exception_type"])
    return keys.calendar_date_key(row["service_id"], row["date"]), row


def _shape_item(row: Row) -> tuple[str, Row] | None:
    if "shape_id" not in row:
        return None
    row["shape_pt_sequence"] = int(row.get("shape_pt_sequence") or 0)
    row["shape_pt_lat"] = float(row["shape_pt_lat"])
    row["shape_pt_lon"] = float(row["shape_pt_lon"])
    return keys.shape_point_key(row["shape_id"], row["shape_pt_sequence"]), row
