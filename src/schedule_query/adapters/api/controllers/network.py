from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from schedule_query.adapters.api.dependencies import (
    get_calendar_service,
    get_network_service,
)
from schedule_query.adapters.api.schemas.network import (
    AgencySchema,
    CalendarDateSchema,
    GeoJsonFeatureSchema,
    ServiceDaysSchema,
)
from schedule_query.app.services.calendar_service import CalendarService
from schedule_query.app.services.network_service import NetworkService
from schedule_query.domain.algorithms.geojson import shape_as_geojson
from schedule_query.domain.exceptions import NotFound
from schedule_query.domain.models import Agency, DayNameStyle

router = APIRouter(tags=["network"])


def _agency_to_schema(a: Agency) -> AgencySchema:
    return AgencySchema(
        agency_id=a.agency_id,
        name=a.name,
        url=a.url,
        timezone=a.timezone,
        lang=a.lang,
        phone=a.phone,
    )


@router.get("/agency", response_model=AgencySchema)
async def get_default_agency(
    service: NetworkService = Depends(get_network_service),
) -> AgencySchema:
    return _agency_to_schema(await service.get_agency())


@router.get("/agency/{agency_id}", response_model=AgencySchema)
async def get_agency(
    agency_id: str,
    service: NetworkService = Depends(get_network_service),
) -> AgencySchema:
    return _agency_to_schema(await service.get_agency(agency_id=agency_id))


@router.get("/shapes/{shape_id}", response_model=GeoJsonFeatureSchema)
async def get_shape(
    shape_id: str,
    service: NetworkService = Depends(get_network_service),
) -> GeoJsonFeatureSchema:
    points = await service.shape_points(shape_id=shape_id)
    if not points:
        raise NotFound(f"Shape {shape_id!r} not found")
    return GeoJsonFeatureSchema(**shape_as_geojson(points))


@router.get("/services/{service_id}/days", response_model=ServiceDaysSchema)
async def service_days(
    service_id: str,
    style: str = Query(default=DayNameStyle.NORMAL.value, description="normal, short or min"),
    service: CalendarService = Depends(get_calendar_service),
) -> ServiceDaysSchema:
    days = await service.service_days(service_id=service_id)
    return ServiceDaysSchema(
        service_id=service_id,
        days=[int(d) for d in days],
        label=days.format(style),
    )


@router.get("/services/{service_id}/dates/{day}", response_model=CalendarDateSchema)
async def calendar_date(
    service_id: str,
    day: str,
    service: CalendarService = Depends(get_calendar_service),
) -> CalendarDateSchema:
    entry = await service.get_calendar_date(service_id=service_id, day=day)
    return CalendarDateSchema(
        service_id=entry.service_id,
        date=entry.date,
        exception_type=entry.exception_type,
        service_added=entry.service_added,
    )
