from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class AgencySchema(BaseModel):
    agency_id: str | None = None
    name: str
    url: str
    timezone: str
    lang: str | None = None
    phone: str | None = None


class ServiceDaysSchema(BaseModel):
    service_id: str
    days: list[int]
    label: str


class CalendarDateSchema(BaseModel):
    service_id: str
    date: str
    exception_type: int
    service_added: bool


class GeoJsonFeatureSchema(BaseModel):
    type: str = "Feature"
    id: str
    geometry: dict[str, Any]
    properties: dict[str, Any] | None = None
