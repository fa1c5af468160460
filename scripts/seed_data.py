"""
Data Seeder for Wagebook.
Populates the database with realistic days for testing and demo purposes.
"""

import asyncio
import sys
import random
from datetime import datetime, timedelta, date
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from wagebook.domain.models import DayEntry, DayType, TimeSegment
from wagebook.infra.config import DATABASE_FILE_NAME, get_settings
from wagebook.infra.db import init_db
from wagebook.infra.repository import DayEntryRepository


async def reset_database():
    """Delete the existing database file to ensure a fresh seed"""
    db_path = get_settings().data_dir / DATABASE_FILE_NAME
    if db_path.exists():
        print(f"Removing existing database at: {db_path}")
        try:
            db_path.unlink()
            print("Database removed.")
        except PermissionError:
            print("ERROR: Could not remove database. It might be in use.")
            sys.exit(1)
    else:
        print(f"No existing database found at: {db_path}")


def work_day(current: date) -> DayEntry:
    """
    A typical office day:
    - 08:30 - 12:00 morning block
    - 12:30 - 16:30/17:30 afternoon block with a short coffee break
    """
    day_date = datetime.combine(current, datetime.min.time())
    afternoon_end = 17 if random.random() > 0.3 else 16
    return DayEntry(
        date=current,
        type=DayType.WORK,
        segments=[
            TimeSegment(
                start=day_date.replace(hour=8, minute=30),
                end=day_date.replace(hour=12, minute=0)
            ),
            TimeSegment(
                start=day_date.replace(hour=12, minute=30),
                end=day_date.replace(hour=afternoon_end, minute=30),
                break_seconds=10 * 60
            ),
        ],
        notes="Office"
    )


async def seed():
    await reset_database()
    print("Starting data seeding...")

    settings = get_settings()
    await init_db(settings.get_db_url())
    day_repo = DayEntryRepository()

    # Weekdays of the first quarter of 2026, so April has full lookback history
    start_date = date(2026, 1, 1)
    end_date = date(2026, 4, 30)

    vacation_days = {date(2026, 2, 16), date(2026, 2, 17), date(2026, 4, 7)}
    sick_days = {date(2026, 3, 11)}

    current = start_date
    while current <= end_date:
        # Skip weekends
        if current.weekday() >= 5:  # Sat=5, Sun=6
            current += timedelta(days=1)
            continue

        if current in vacation_days:
            entry = DayEntry(date=current, type=DayType.VACATION, notes="Vacation")
        elif current in sick_days:
            entry = DayEntry(date=current, type=DayType.SICK)
        elif current.weekday() == 4:
            # Fridays are typed in by hand
            entry = DayEntry(date=current, type=DayType.MANUAL, manual_worked_seconds=5 * 3600)
        else:
            entry = work_day(current)

        await day_repo.upsert(entry)
        print(f"Generated {entry.type.value} day {current}")
        current += timedelta(days=1)

    print("Seeding complete.")


if __name__ == "__main__":
    asyncio.run(seed())
