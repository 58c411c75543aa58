from __future__ import annotations

from pydantic import BaseModel

from schedule_query.adapters.api.schemas.routes import GeoPointSchema


class StopSchema(BaseModel):
    stop_id: str
    name: str
    location: GeoPointSchema
    code: str | None = None
    description: str | None = None


class NearestStopSchema(BaseModel):
    query: GeoPointSchema
    max_distance: float | None = None
    stop: StopSchema | None = None
    distance_m: float | None = None
