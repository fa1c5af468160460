import calendar
import datetime
from decimal import Decimal
from pathlib import Path
from typing import Tuple


def get_resource_path(relative_path: str) -> Path:
    """
    Get absolute path to a resource shipped inside the package.

    Args:
        relative_path: Relative path from the package root (e.g., "resources/templates")

    Returns:
        Absolute Path object
    """
    # This file is wagebook/utils.py
    return Path(__file__).parent.absolute() / relative_path


def parse_period(period: str) -> datetime.date:
    """'2026-02' -> date(2026, 2, 1)"""
    year, month = map(int, period.split('-'))
    return datetime.date(year, month, 1)


def month_bounds(day: datetime.date) -> Tuple[datetime.date, datetime.date]:
    """First and last day of the month containing the given day."""
    _, last_day = calendar.monthrange(day.year, day.month)
    return day.replace(day=1), day.replace(day=last_day)


def hhmm_string(seconds: int) -> str:
    """Format seconds as HH:MM, negative values clamp to 00:00"""
    clamped = max(0, seconds)
    hours, remainder = divmod(clamped, 3600)
    return f"{hours:02d}:{remainder // 60:02d}"


def cents_to_decimal_string(cents: int) -> str:
    """1234 -> '12.34'"""
    return f"{Decimal(cents) / 100:.2f}"


def currency_string(cents: int, symbol: str = "€") -> str:
    return f"{cents_to_decimal_string(cents)} {symbol}"
