"""
Tests for public holidays and paid holiday entries.

The holidays library handles regional variations; these tests pin the
German states we rely on and the weekday mask that decides which holidays
become paid days off.
"""

import datetime
import pytest

from wagebook.domain.models import DayEntry, DayType, PaySettings, WeekStart
from wagebook.services.calendar_service import CalendarService


# German states with their codes
GERMAN_STATES = [
    "BW",  # Baden-Württemberg
    "BY",  # Bavaria
    "BE",  # Berlin
    "BB",  # Brandenburg
    "HB",  # Bremen
    "HH",  # Hamburg
    "HE",  # Hesse
    "MV",  # Mecklenburg-Vorpommern
    "NI",  # Lower Saxony
    "NW",  # North Rhine-Westphalia
    "RP",  # Rhineland-Palatinate
    "SL",  # Saarland
    "SN",  # Saxony
    "ST",  # Saxony-Anhalt
    "SH",  # Schleswig-Holstein
    "TH",  # Thuringia
]


class TestGermanHolidays:
    """Nationwide and regional holidays."""

    @pytest.mark.parametrize("state", GERMAN_STATES)
    def test_new_year_is_holiday_in_all_states(self, state: str):
        service = CalendarService("DE", state)
        assert service.is_holiday(datetime.date(2026, 1, 1)), f"New Year should be a holiday in {state}"

    @pytest.mark.parametrize("state", GERMAN_STATES)
    def test_german_unity_day_is_holiday_in_all_states(self, state: str):
        service = CalendarService("DE", state)
        assert service.is_holiday(datetime.date(2026, 10, 3))

    def test_nationwide_without_subdivision(self):
        service = CalendarService("DE")
        # Good Friday 2026 is April 3rd
        assert service.is_holiday(datetime.date(2026, 4, 3))
        assert not service.is_holiday(datetime.date(2026, 1, 6))

    def test_epiphany_is_holiday_only_in_specific_states(self):
        """
        Epiphany (January 6th) is only a holiday in:
        - Baden-Württemberg (BW)
        - Bavaria (BY)
        - Saxony-Anhalt (ST)
        """
        epiphany = datetime.date(2026, 1, 6)
        states_with_epiphany = {"BW", "BY", "ST"}

        for state in GERMAN_STATES:
            service = CalendarService("DE", state)
            assert service.is_holiday(epiphany) == (state in states_with_epiphany), (
                f"Unexpected Epiphany status in {state}"
            )

    def test_holiday_name_is_returned(self):
        service = CalendarService("DE", "BY")
        name = service.get_holiday_name(datetime.date(2026, 12, 25))
        assert "Weihnacht" in name or "Christmas" in name, f"Expected Christmas-related name, got: {name}"

    def test_non_holiday_returns_empty_name(self):
        service = CalendarService("DE", "BY")
        # January 2, 2026 is a regular Friday
        assert service.get_holiday_name(datetime.date(2026, 1, 2)) == ""

    def test_weekend(self):
        service = CalendarService("DE")
        # January 3, 2026 is a Saturday
        assert service.is_weekend(datetime.date(2026, 1, 3))
        assert not service.is_weekend(datetime.date(2026, 1, 2))


class TestCalendarServiceConfiguration:

    def test_codes_are_normalized(self):
        service = CalendarService(" de ", " by ")
        assert service.country_code == "DE"
        assert service.subdivision_code == "BY"

    def test_blank_subdivision_means_nationwide(self):
        assert CalendarService("DE", "  ").subdivision_code is None

    @pytest.mark.parametrize("country", [None, "", "D"])
    def test_missing_country(self, country):
        with pytest.raises(ValueError, match="Country code is missing"):
            CalendarService(country)

    def test_unknown_region(self):
        with pytest.raises(ValueError):
            CalendarService("XX")

    def test_from_settings(self):
        settings = PaySettings(holiday_country_code="AT", holiday_subdivision_code=None)
        service = CalendarService.from_settings(settings)
        assert service.country_code == "AT"


class TestHolidayDays:

    def test_year_listing(self):
        days = CalendarService("DE", "BY").holiday_days(2026)

        assert days == sorted(days, key=lambda d: d.date)
        assert all(day.source_year == 2026 for day in days)
        new_year = days[0]
        assert new_year.date == datetime.date(2026, 1, 1)
        assert new_year.country_code == "DE"
        assert new_year.subdivision_code == "BY"
        assert new_year.key == "DE-BY-2026-01-01"

    def test_regional_listing_is_larger(self):
        nationwide = CalendarService("DE").holiday_days(2026)
        bavaria = CalendarService("DE", "BY").holiday_days(2026)
        assert len(bavaria) > len(nationwide)
        assert nationwide[0].key == "DE-ALL-2026-01-01"


class TestPaidHolidays:

    @pytest.mark.parametrize("day,week_start,expected", [
        (datetime.date(2026, 1, 1), WeekStart.MONDAY, True),    # Thursday
        (datetime.date(2026, 4, 3), WeekStart.MONDAY, True),    # Friday
        (datetime.date(2026, 10, 3), WeekStart.MONDAY, False),  # Saturday
        (datetime.date(2026, 4, 3), WeekStart.SUNDAY, False),   # Friday, Sun-Thu week
        (datetime.date(2026, 1, 4), WeekStart.SUNDAY, True),    # Sunday
    ])
    def test_default_mask(self, day, week_start, expected):
        settings = PaySettings(week_start=week_start, scheduled_workdays_count=5)
        assert CalendarService.is_paid_holiday_weekday(day, settings) == expected

    def test_explicit_mask(self):
        # Saturday only
        settings = PaySettings(paid_holiday_weekday_mask=1 << 5)
        assert CalendarService.is_paid_holiday_weekday(datetime.date(2026, 10, 3), settings)
        assert not CalendarService.is_paid_holiday_weekday(datetime.date(2026, 1, 1), settings)

    def test_disabled_by_default(self):
        assert CalendarService("DE").paid_holiday_entries(2026, PaySettings()) == []

    def test_entries_for_paid_weekdays(self):
        settings = PaySettings(mark_paid_holidays=True)
        existing = [DayEntry(date=datetime.date(2026, 5, 1), type=DayType.WORK)]

        entries = CalendarService("DE").paid_holiday_entries(2026, settings, existing)
        dates = [entry.date for entry in entries]

        assert datetime.date(2026, 1, 1) in dates
        assert datetime.date(2026, 12, 25) in dates
        # Already recorded
        assert datetime.date(2026, 5, 1) not in dates
        # Saturdays
        assert datetime.date(2026, 10, 3) not in dates
        assert datetime.date(2026, 12, 26) not in dates
        assert all(entry.type == DayType.HOLIDAY and entry.notes for entry in entries)
