"""
Calendar Service - Handles public holidays and paid holiday days.

Architecture Decision: Strategy Pattern
The holidays package covers every country/subdivision offline, so the same
service serves any configured region without a network round trip.
"""

import datetime
import logging
from typing import Iterable, List, Optional

import holidays

from wagebook.domain.models import DayEntry, DayType, HolidayCalendarDay, PaySettings

logger = logging.getLogger(__name__)


class CalendarService:
    """
    Handles holiday logic for one country and optional subdivision.
    Separated from the calculation engine for Separation of Concerns.
    """

    def __init__(self, country_code: Optional[str] = 'DE', subdivision_code: Optional[str] = None,
                 language: Optional[str] = None):
        """
        Initialize with a country and subdivision code.

        Args:
            country_code: Two-letter ISO country code (e.g., 'DE')
            subdivision_code: Subdivision code (e.g., 'BY' for Bavaria), or None for nationwide
            language: Holiday name language, library default when None

        Raises:
            ValueError: if the country or subdivision is unknown
        """
        self.language = language
        self.country_code = _normalize(country_code)
        self.subdivision_code = _normalize(subdivision_code)
        if self.country_code is None or len(self.country_code) != 2:
            raise ValueError("Country code is missing.")

        try:
            self.country_holidays = holidays.country_holidays(
                self.country_code,
                subdiv=self.subdivision_code,
                language=language
            )
        except NotImplementedError as e:
            raise ValueError(f"Unsupported holiday region: {self.country_code}/{self.subdivision_code}") from e

    @classmethod
    def from_settings(cls, settings: PaySettings, language: Optional[str] = None) -> "CalendarService":
        return cls(settings.holiday_country_code, settings.holiday_subdivision_code, language=language)

    def is_holiday(self, date_obj: datetime.date) -> bool:
        """Check if date is a public holiday"""
        return date_obj in self.country_holidays

    def get_holiday_name(self, date_obj: datetime.date) -> str:
        """
        Get the name of the holiday for a given date.

        Returns:
            Holiday name or empty string if not a holiday
        """
        return self.country_holidays.get(date_obj, "")

    def is_weekend(self, date_obj: datetime.date) -> bool:
        return date_obj.weekday() > 4

    def holiday_days(self, year: int) -> List[HolidayCalendarDay]:
        """All holidays of a year, sorted by date."""
        year_holidays = holidays.country_holidays(
            self.country_code,
            subdiv=self.subdivision_code,
            years=year,
            language=self.language
        )
        days = [
            HolidayCalendarDay(
                date=date_obj,
                local_name=name,
                country_code=self.country_code,
                subdivision_code=self.subdivision_code,
                source_year=year
            )
            for date_obj, name in year_holidays.items()
        ]
        days.sort(key=lambda d: d.date)
        return days

    @staticmethod
    def is_paid_holiday_weekday(date_obj: datetime.date, settings: PaySettings) -> bool:
        """Whether a holiday on this weekday is a paid day off."""
        return bool(settings.effective_paid_holiday_weekday_mask & (1 << date_obj.weekday()))

    def paid_holiday_entries(self, year: int, settings: PaySettings,
                             existing: Iterable[DayEntry] = ()) -> List[DayEntry]:
        """
        Holiday day entries for paid holidays of a year that have no entry yet.

        Returns an empty list unless settings.mark_paid_holidays is enabled.
        """
        if not settings.mark_paid_holidays:
            return []

        taken = {entry.date for entry in existing}
        entries = []
        for holiday in self.holiday_days(year):
            if holiday.date in taken:
                continue
            if not self.is_paid_holiday_weekday(holiday.date, settings):
                continue
            entries.append(DayEntry(date=holiday.date, type=DayType.HOLIDAY, notes=holiday.local_name))

        logger.info(f"{len(entries)} paid holiday entries for {year} ({self.country_code})")
        return entries


def _normalize(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip().upper()
    return value or None
