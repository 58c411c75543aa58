from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from schedule_query.app.ports.output import IDocumentStore
from schedule_query.app.ports.output.document_keys import calendar_date_key, calendar_key
from schedule_query.domain.models import (
    Calendar,
    CalendarDate,
    DayNameStyle,
    WeekdaySet,
)

from .documents import calendar_date_from_doc, calendar_from_doc


@dataclass(slots=True)
class CalendarService:
    calendar_store: IDocumentStore
    calendar_date_store: IDocumentStore

    async def get_calendar_entry(self, *, service_id: str) -> Calendar:
        return calendar_from_doc(await self.calendar_store.get_by_key(calendar_key(service_id)))

    async def service_days(self, *, service_id: str) -> WeekdaySet:
        entry = await self.get_calendar_entry(service_id=service_id)
        return entry.weekdays()

    async def service_days_label(
        self, *, service_id: str, style: DayNameStyle | str = DayNameStyle.NORMAL
    ) -> str:
        """E.g. 'Daily' or 'Mon - Fri'; InvalidState for a service with no days."""

        days = await self.service_days(service_id=service_id)
        return days.format(style)

    async def get_calendar_date(self, *, service_id: str, day: date | str) -> CalendarDate:
        # Accepts a date or a GTFS YYYYMMDD string.
        raw = day.strftime("%Y%m%d") if isinstance(day, date) else day
        doc = await self.calendar_date_store.get_by_key(calendar_date_key(service_id, raw))
        return calendar_date_from_doc(doc)
