from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from schedule_query.adapters.api.dependencies import get_stop_service
from schedule_query.adapters.api.schemas.network import GeoJsonFeatureSchema
from schedule_query.adapters.api.schemas.routes import GeoPointSchema
from schedule_query.adapters.api.schemas.stops import NearestStopSchema, StopSchema
from schedule_query.app.services.stop_service import StopService
from schedule_query.domain.algorithms.geo_utils import haversine_distance_m
from schedule_query.domain.algorithms.geojson import stop_as_geojson
from schedule_query.domain.models import GeoPoint, Stop

router = APIRouter(prefix="/stops", tags=["stops"])


def _stop_to_schema(s: Stop) -> StopSchema:
    return StopSchema(
        stop_id=s.id,
        name=s.name,
        location=GeoPointSchema(lat=s.location.lat, lon=s.location.lon),
        code=s.code,
        description=s.description,
    )


@router.get("/nearest", response_model=NearestStopSchema)
async def nearest_stop(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lon: float = Query(..., ge=-180.0, le=180.0),
    max_distance: float | None = Query(
        default=None, ge=0.0, description="Search radius in coordinate degrees"
    ),
    service: StopService = Depends(get_stop_service),
) -> NearestStopSchema:
    point = GeoPoint(lat=lat, lon=lon)
    stop = await service.nearest_stop(point=point, max_distance=max_distance)
    return NearestStopSchema(
        query=GeoPointSchema(lat=lat, lon=lon),
        max_distance=max_distance,
        stop=_stop_to_schema(stop) if stop else None,
        distance_m=haversine_distance_m(point, stop.location) if stop else None,
    )


@router.get("/{stop_id}", response_model=StopSchema)
async def get_stop(
    stop_id: str,
    service: StopService = Depends(get_stop_service),
) -> StopSchema:
    return _stop_to_schema(await service.get_stop(stop_id=stop_id))


@router.get("/{stop_id}/geojson", response_model=GeoJsonFeatureSchema)
async def get_stop_geojson(
    stop_id: str,
    service: StopService = Depends(get_stop_service),
) -> GeoJsonFeatureSchema:
    return GeoJsonFeatureSchema(**stop_as_geojson(await service.get_stop(stop_id=stop_id)))
