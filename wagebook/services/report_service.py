"""
Report Generation Service using Jinja2 templates.

Architecture Decision: Template Pattern
Allows users to customize reports without changing code.
"""

import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader

from wagebook.domain.models import (
    ComputationError,
    ComputationWarning,
    DayEntry,
    NetWageMonthConfig,
    PaySettings,
)
from wagebook.infra.repository import DayEntryRepository, NetWageConfigRepository
from wagebook.services.calculation_service import CalculationService
from wagebook.services.net_wage_service import NetWageService
from wagebook.utils import currency_string, get_resource_path, hhmm_string, month_bounds

DEFAULT_TEMPLATE = "month_summary.txt"


class ReportService:
    """
    Generates month reports from day entries using Jinja2 templates.
    """

    def __init__(self, template_dir: Optional[Path] = None,
                 calculation_service: Optional[CalculationService] = None):
        """
        Initialize the report service.

        Args:
            template_dir: Directory containing Jinja2 templates
            calculation_service: Engine to use, a fresh one by default
        """
        if template_dir is None:
            template_dir = get_resource_path("resources/templates")

        self.template_dir = template_dir
        self.service = calculation_service or CalculationService()
        self.net_wage_service = NetWageService(self.service)

        self.day_repo = DayEntryRepository()
        self.net_repo = NetWageConfigRepository()

        # Setup Jinja2 environment
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            trim_blocks=True,
            lstrip_blocks=True
        )

        # Add custom filters
        self.env.filters['hhmm'] = hhmm_string
        self.env.filters['currency'] = currency_string

    def build_context(self, entries: Iterable[DayEntry], month: datetime.date,
                      settings: PaySettings,
                      net_configs: Iterable[NetWageMonthConfig] = ()) -> Dict[str, Any]:
        """Compute every day of the month and the month totals for a template."""
        entries = list(entries)
        first_day, last_day = month_bounds(month)
        lookup = self.service.entries_by_date(entries)

        days: List[Dict[str, Any]] = []
        for entry in sorted(entries, key=lambda e: e.date):
            if not first_day <= entry.date <= last_day:
                continue
            result = self.service.day_computation(entry, entries, settings, lookup)
            days.append({
                'entry': entry,
                'label': entry.type.label,
                'status': result.status,
                'seconds': result.value_seconds_or_zero,
                'cents': result.value_cents_or_zero,
                'message': result.message if isinstance(result, (ComputationWarning, ComputationError)) else "",
            })

        summary = self.service.period_summary(entries, first_day, last_day, settings)
        net_cents = self.net_wage_service.monthly_net_cents(summary, first_day, net_configs, settings)

        return {
            'month': first_day,
            'days': days,
            'summary': summary,
            'net_cents': net_cents,
            'generated_at': datetime.datetime.now(),
        }

    def render_month(self, entries: Iterable[DayEntry], month: datetime.date,
                     settings: PaySettings, net_configs: Iterable[NetWageMonthConfig] = (),
                     template_name: str = DEFAULT_TEMPLATE) -> str:
        context = self.build_context(entries, month, settings, net_configs)
        template = self.env.get_template(template_name)
        return template.render(**context)

    async def generate_report(self, month: datetime.date, settings: PaySettings,
                              template_name: str = DEFAULT_TEMPLATE,
                              output_file: Optional[Path] = None) -> str:
        """
        Generate a month report from the stored days.

        Args:
            month: Any day of the reporting month
            settings: Pay settings to compute with
            template_name: Name of the template file
            output_file: Optional file path to save the report

        Returns:
            The generated report as a string
        """
        entries = await self.day_repo.get_all()
        net_configs = await self.net_repo.get_all()

        report_content = self.render_month(entries, month, settings, net_configs, template_name)

        # Save to file if specified
        if output_file:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(output_file, 'w', encoding='utf-8') as f:
                f.write(report_content)

        return report_content

    def list_templates(self) -> List[str]:
        """List all available template files"""
        return [f.name for f in self.template_dir.glob("*.txt")] + \
               [f.name for f in self.template_dir.glob("*.md")]
