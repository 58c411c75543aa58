from __future__ import annotations

from dataclasses import dataclass

from schedule_query.app.ports.output import IDocumentStore
from schedule_query.app.ports.output.document_keys import stop_key
from schedule_query.domain.algorithms.nearest_stop import nearest_key
from schedule_query.domain.exceptions import InvalidArgument
from schedule_query.domain.models import GeoPoint, Stop

from .documents import STOP_LOCATION_FIELDS, location_from_doc, stop_from_doc


@dataclass(slots=True)
class StopService:
    stop_store: IDocumentStore

    async def get_stop(self, *, stop_id: str) -> Stop:
        return stop_from_doc(await self.stop_store.get_by_key(stop_key(stop_id)))

    async def nearest_stop(
        self, *, point: GeoPoint, max_distance: float | None = None
    ) -> Stop | None:
        """Closest stop to `point`, or None when it lies beyond `max_distance`.

        `max_distance` is in coordinate degrees. Only coordinates are read
        for the scan; the winning stop's document is fetched afterwards.
        """

        if max_distance is not None and max_distance < 0:
            raise InvalidArgument(f"Negative max_distance: {max_distance}")

        rows = await self.stop_store.list_all(include_docs=True, fields=STOP_LOCATION_FIELDS)
        key = nearest_key(
            ((row.key, location_from_doc(row.doc)) for row in rows if row.doc is not None),
            point=point,
            max_distance=max_distance,
        )
        if key is None:
            return None
        return stop_from_doc(await self.stop_store.get_by_key(key))
