"""
Script to import public holidays of a year into the local database.

Uses the configured holiday country/subdivision. When paid holidays are
marked in the settings, holiday day entries are created for paid weekdays
that have no entry yet.
"""

import sys
import asyncio
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from wagebook.infra.config import get_settings
from wagebook.infra.db import init_db
from wagebook.infra.repository import DayEntryRepository, HolidayRepository
from wagebook.services.calendar_service import CalendarService


async def main():
    if len(sys.argv) < 2 or not sys.argv[1].isdigit():
        print("Usage: python import_holidays.py <year>")
        sys.exit(1)

    year = int(sys.argv[1])
    settings = get_settings()
    prefs = settings.preferences
    await init_db(settings.get_db_url())

    try:
        calendar_service = CalendarService.from_settings(prefs)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    days = calendar_service.holiday_days(year)
    inserted = await HolidayRepository().replace_year(
        calendar_service.country_code,
        calendar_service.subdivision_code,
        year,
        days
    )
    print(f"Imported {inserted} holidays for {year}.")

    day_repo = DayEntryRepository()
    existing = await day_repo.get_range(days[0].date, days[-1].date) if days else []
    for entry in calendar_service.paid_holiday_entries(year, prefs, existing):
        await day_repo.upsert(entry)
        print(f"Marked {entry.date} as paid holiday: {entry.notes}")


if __name__ == "__main__":
    asyncio.run(main())
