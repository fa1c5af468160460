"""Infrastructure layer - Database, persistence and configuration"""

from .db import DatabaseEngine, get_engine, init_db
from .models import DayEntryModel, HolidayCalendarDayModel, NetWageMonthConfigModel, TimeSegmentModel

__all__ = [
    "DatabaseEngine",
    "get_engine",
    "init_db",
    "DayEntryModel",
    "HolidayCalendarDayModel",
    "NetWageMonthConfigModel",
    "TimeSegmentModel",
]
