from .geo import GeoPoint
from .gtfs import Agency, Calendar, CalendarDate, GtfsRoute, GtfsTrip, ShapePoint, StopTime
from .schedule import ScheduleRange
from .stop import Stop
from .time_of_day import TimeOfDay
from .weekdays import DayNameStyle, Weekday, WeekdaySet, same_days

__all__ = [
    "Agency",
    "Calendar",
    "CalendarDate",
    "DayNameStyle",
    "GeoPoint",
    "GtfsRoute",
    "GtfsTrip",
    "ScheduleRange",
    "ShapePoint",
    "Stop",
    "StopTime",
    "TimeOfDay",
    "Weekday",
    "WeekdaySet",
    "same_days",
]
