"""
Script to export one month of day entries as CSV.
"""

import sys
import asyncio
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from wagebook.infra.config import get_settings
from wagebook.infra.db import init_db
from wagebook.infra.repository import DayEntryRepository
from wagebook.services.export_service import CSVExportService
from wagebook.utils import parse_period


async def main():
    if len(sys.argv) < 2:
        print("Usage: python export_month.py <YYYY-MM> [output.csv]")
        sys.exit(1)

    try:
        month = parse_period(sys.argv[1])
    except ValueError:
        print(f"Error: '{sys.argv[1]}' is not a YYYY-MM period.")
        sys.exit(1)

    settings = get_settings()
    await init_db(settings.get_db_url())

    # Lookback reaches into earlier months, so export from the full snapshot
    entries = await DayEntryRepository().get_all()
    print(f"Exporting {month:%Y-%m} from {len(entries)} stored days...")

    csv_content = CSVExportService().csv_for_month(entries, month, settings.preferences)

    # Determine output path
    if len(sys.argv) > 2:
        output_file = Path(sys.argv[2])
    else:
        output_file = Path(f"wagebook_{month:%Y-%m}.csv")

    # Ensure directory exists
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, 'w', encoding='utf-8') as f:
        f.write(csv_content)

    print(f"Export successfully saved to: {output_file.absolute()}")


if __name__ == "__main__":
    asyncio.run(main())
