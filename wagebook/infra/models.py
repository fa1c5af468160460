"""
SQLAlchemy ORM models.
Separated from db.py for cleaner imports.
"""

from .db import Base, DayEntryModel, HolidayCalendarDayModel, NetWageMonthConfigModel, TimeSegmentModel

__all__ = ["Base", "DayEntryModel", "HolidayCalendarDayModel", "NetWageMonthConfigModel", "TimeSegmentModel"]
