"""
CSV Export Service.

One row per recorded day of a month with worked and credited values, meant
for spreadsheets and payroll hand-off.
"""

import csv
import datetime
import io
import logging
from typing import Iterable, Optional

from wagebook.domain.models import ComputationError, DayEntry, PaySettings
from wagebook.services.calculation_service import CalculationService, WorkedSecondsError
from wagebook.utils import cents_to_decimal_string, month_bounds

logger = logging.getLogger(__name__)

CSV_HEADER = ["date", "type", "workedHours", "workedPay", "creditedHours", "creditedPay", "notes"]


class CSVExportService:
    """Builds month CSVs from day entries using the calculation engine."""

    def __init__(self, service: Optional[CalculationService] = None):
        self.service = service or CalculationService()

    def csv_for_month(self, entries: Iterable[DayEntry], month: datetime.date,
                      settings: PaySettings) -> str:
        """
        Render the month containing `month` as CSV.

        Lookback for credited days may reach into earlier months, so `entries`
        should be the full snapshot, not only the month's days.
        """
        entries = list(entries)
        first_day, last_day = month_bounds(month)
        lookup = self.service.entries_by_date(entries)
        month_entries = sorted(
            (entry for entry in entries if first_day <= entry.date <= last_day),
            key=lambda entry: entry.date
        )

        output = io.StringIO()
        writer = csv.writer(output, lineterminator='\n')
        writer.writerow(CSV_HEADER)

        for entry in month_entries:
            try:
                worked_seconds = self.service.worked_seconds(entry)
                worked_pay = self.service.pay_cents(worked_seconds, settings)
            except WorkedSecondsError:
                worked_seconds = 0
                worked_pay = 0

            credited_seconds = 0
            credited_pay = 0
            if entry.type.is_credited:
                result = self.service.day_computation(entry, entries, settings, lookup)
                if not isinstance(result, ComputationError):
                    credited_seconds = result.value_seconds
                    credited_pay = result.value_cents

            writer.writerow([
                entry.date.isoformat(),
                entry.type.value,
                f"{worked_seconds / 3600:.2f}",
                cents_to_decimal_string(worked_pay),
                f"{credited_seconds / 3600:.2f}",
                cents_to_decimal_string(credited_pay),
                entry.notes.replace(",", " ")
            ])

        logger.info(f"Exported {len(month_entries)} days for {first_day:%Y-%m}")
        return output.getvalue()
