"""Services layer - Business logic"""

from .calculation_service import CalculationService, CreditSource, WorkedSecondsError
from .calendar_service import CalendarService
from .export_service import CSVExportService
from .net_wage_service import NetWageService
from .report_service import ReportService

__all__ = [
    "CalculationService",
    "CreditSource",
    "WorkedSecondsError",
    "CalendarService",
    "CSVExportService",
    "NetWageService",
    "ReportService",
]
