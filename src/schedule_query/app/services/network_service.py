from __future__ import annotations

from dataclasses import dataclass

from schedule_query.app.ports.output import IDocumentStore
from schedule_query.app.ports.output.document_keys import (
    agency_key,
    prefix_range,
    route_key,
    shape_point_key,
    shape_points_prefix,
)
from schedule_query.domain.exceptions import NotFound
from schedule_query.domain.models import Agency, GtfsRoute, ShapePoint

from .documents import agency_from_doc, route_from_doc, shape_point_from_doc


@dataclass(slots=True)
class NetworkService:
    """Agencies, routes and shapes: the static parts of a feed."""

    agency_store: IDocumentStore
    route_store: IDocumentStore
    shape_store: IDocumentStore

    async def get_agency(self, *, agency_id: str | None = None) -> Agency:
        """Most feeds have a single agency without an id; return the first one."""

        if agency_id:
            return agency_from_doc(await self.agency_store.get_by_key(agency_key(agency_id)))

        rows = await self.agency_store.list_all(include_docs=True)
        if not rows or rows[0].doc is None:
            raise NotFound("No agencies in schedule")
        return agency_from_doc(rows[0].doc)

    async def get_route(self, *, route_id: str) -> GtfsRoute:
        return route_from_doc(await self.route_store.get_by_key(route_key(route_id)))

    async def list_routes(self) -> tuple[GtfsRoute, ...]:
        rows = await self.route_store.list_all(include_docs=True)
        routes = [route_from_doc(row.doc) for row in rows if row.doc is not None]
        routes.sort(key=lambda r: (r.short_name or "", r.long_name or "", r.route_id))
        return tuple(routes)

    async def get_shape_point(self, *, shape_id: str, sequence: int) -> ShapePoint:
        return shape_point_from_doc(
            await self.shape_store.get_by_key(shape_point_key(shape_id, sequence))
        )

    async def shape_points(self, *, shape_id: str) -> tuple[ShapePoint, ...]:
        """Every point of a shape in shape_pt_sequence order."""

        start, end = prefix_range(shape_points_prefix(shape_id))
        rows = await self.shape_store.get_range(start, end, include_docs=True)
        return tuple(shape_point_from_doc(row.doc) for row in rows if row.doc is not None)
