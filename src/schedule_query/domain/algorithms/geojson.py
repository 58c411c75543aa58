from __future__ import annotations

from typing import Any, Sequence

from schedule_query.domain.exceptions import InvalidArgument
from schedule_query.domain.models import ShapePoint, Stop


def stop_as_geojson(stop: Stop) -> dict[str, Any]:
    return {
        "type": "Feature",
        "id": stop.id,
        "geometry": {"type": "Point", "coordinates": stop.location.lon_lat()},
        "properties": {"name": stop.name},
    }


def shape_as_geojson(points: Sequence[ShapePoint]) -> dict[str, Any]:
    """Convert sorted points of a single shape into a LineString feature."""

    if not points:
        raise InvalidArgument("Shape has no points")
    return {
        "type": "Feature",
        "id": points[0].shape_id,
        "geometry": {
            "type": "LineString",
            "coordinates": [p.location.lon_lat() for p in points],
        },
        "properties": None,
    }
