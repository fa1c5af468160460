"""Domain layer - Pure business entities and logic"""

from .models import (
    ComputationError,
    ComputationOk,
    ComputationResult,
    ComputationWarning,
    DayEntry,
    DayType,
    HolidayCalendarDay,
    HolidayCreditingMode,
    NetWageMonthConfig,
    PayMode,
    PaySettings,
    SegmentValidationError,
    TimeSegment,
    TotalsSummary,
    VacationCreditingMode,
    WeekStart,
)

__all__ = [
    "ComputationError",
    "ComputationOk",
    "ComputationResult",
    "ComputationWarning",
    "DayEntry",
    "DayType",
    "HolidayCalendarDay",
    "HolidayCreditingMode",
    "NetWageMonthConfig",
    "PayMode",
    "PaySettings",
    "SegmentValidationError",
    "TimeSegment",
    "TotalsSummary",
    "VacationCreditingMode",
    "WeekStart",
]
