from __future__ import annotations

import math
from typing import Iterable

from schedule_query.domain.exceptions import NotFound
from schedule_query.domain.models.geo import GeoPoint

from .geo_utils import squared_distance_deg


def nearest_key(
    locations: Iterable[tuple[str, GeoPoint]],
    *,
    point: GeoPoint,
    max_distance: float | None = None,
) -> str | None:
    """Key of the location closest to `point`, or None if outside the radius.

    Distances are planar in coordinate degrees; no projection correction is
    applied. `max_distance` of None means unbounded. The first location wins
    ties. Raises NotFound when there are no locations at all.
    """

    best_key: str | None = None
    best_d2 = math.inf
    for key, loc in locations:
        d2 = squared_distance_deg(point, loc)
        if d2 < best_d2:
            best_d2 = d2
            best_key = key

    if best_key is None:
        raise NotFound("No stops in schedule")

    if max_distance is not None and best_d2 > max_distance * max_distance:
        return None
    return best_key
