#!/usr/bin/env python

"""
Wagebook - Main Entry Point

Prints the month report (worked hours, credited days, gross and estimated
net pay) for the days stored in the local database.

Usage:
    python main.py [YYYY-MM]

Requirements:
    - Python 3.12+
    - See pyproject.toml for dependencies
"""

import asyncio
import datetime
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from wagebook.infra.config import get_settings
from wagebook.infra.db import init_db
from wagebook.services.report_service import ReportService
from wagebook.utils import parse_period


async def run(month: datetime.date) -> None:
    settings = get_settings()
    await init_db(settings.get_db_url())

    report = await ReportService().generate_report(month, settings.preferences)
    print(report)


def main():
    """Main entry point"""
    if len(sys.argv) > 1:
        try:
            month = parse_period(sys.argv[1])
        except ValueError:
            print("Usage: python main.py [YYYY-MM]")
            return 1
    else:
        month = datetime.date.today().replace(day=1)

    asyncio.run(run(month))
    return 0


if __name__ == "__main__":
    sys.exit(main())
