"""
Net Wage Service - estimates the monthly net amount from gross pay.

Each month may carry its own tax/pension/allowance/bonus inputs. A month
without a config inherits the previous month's, then the settings defaults.
"""

import datetime
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

from pydantic import BaseModel

from wagebook.domain.models import NetWageMonthConfig, PaySettings, TotalsSummary, to_day
from wagebook.services.calculation_service import CalculationService

logger = logging.getLogger(__name__)


class EffectiveNetConfig(BaseModel):
    wage_tax_percent: Optional[float] = None
    pension_percent: Optional[float] = None
    monthly_allowance_euro: Optional[float] = None
    bonuses_csv: str = ""


def parse_bonuses(csv_text: Optional[str]) -> List[float]:
    """Parse '100; 50.5' into [100.0, 50.5]. Unparseable parts are skipped."""
    bonuses = []
    for part in (csv_text or "").split(";"):
        part = part.strip()
        if not part:
            continue
        try:
            bonuses.append(float(part))
        except ValueError:
            logger.debug(f"Ignoring bonus value {part!r}")
    return bonuses


def month_start(day) -> datetime.date:
    return to_day(day).replace(day=1)


def previous_month_start(day) -> datetime.date:
    first = month_start(day)
    return month_start(first - datetime.timedelta(days=1))


class NetWageService:
    """Resolves per-month net wage inputs and computes the net amount."""

    def __init__(self, calculation_service: Optional[CalculationService] = None):
        self.calculation_service = calculation_service or CalculationService()

    def effective_config(self, month, configs: Iterable[NetWageMonthConfig],
                         settings: PaySettings) -> EffectiveNetConfig:
        by_month = {config.month_start: config for config in configs}

        for candidate in (month_start(month), previous_month_start(month)):
            config = by_month.get(candidate)
            if config is not None:
                return EffectiveNetConfig(
                    wage_tax_percent=config.wage_tax_percent,
                    pension_percent=config.pension_percent,
                    monthly_allowance_euro=config.monthly_allowance_euro,
                    bonuses_csv=config.bonuses_csv
                )

        return EffectiveNetConfig(
            wage_tax_percent=settings.net_wage_tax_percent,
            pension_percent=settings.net_pension_percent,
            monthly_allowance_euro=settings.net_monthly_allowance_euro,
            bonuses_csv=settings.net_bonuses_csv or ""
        )

    def seed_config(self, month, configs: Iterable[NetWageMonthConfig],
                    settings: PaySettings) -> NetWageMonthConfig:
        """A new config for a month, prefilled from its effective inputs."""
        effective = self.effective_config(month, configs, settings)
        return NetWageMonthConfig(month_start=month_start(month), **effective.model_dump())

    def monthly_net_euro(self, summary: TotalsSummary, month,
                         configs: Iterable[NetWageMonthConfig], settings: PaySettings) -> float:
        effective = self.effective_config(month, configs, settings)
        return self.calculation_service.monthly_net_euro(
            gross_euro=summary.total_cents / 100.0,
            bonuses_euro=sum(parse_bonuses(effective.bonuses_csv)),
            wage_tax_percent=effective.wage_tax_percent,
            pension_percent=effective.pension_percent,
            monthly_allowance_euro=effective.monthly_allowance_euro
        )

    def monthly_net_cents(self, summary: TotalsSummary, month,
                          configs: Iterable[NetWageMonthConfig], settings: PaySettings) -> int:
        net_euro = self.monthly_net_euro(summary, month, configs, settings)
        return int(Decimal(repr(net_euro * 100)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
