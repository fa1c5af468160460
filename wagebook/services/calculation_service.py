"""
Calculation Service - worked time, pay and credited time per day.

Architecture Decision: Stateless service
Every method is a pure function of its arguments (a day, a snapshot of all
days and the pay settings). Nothing is cached between calls, so callers can
recompute freely after edits and two calls with equal inputs give equal
results.
"""

import datetime
import logging
from enum import Enum
from typing import Dict, Iterable, List, Optional, assert_never

from wagebook.domain.models import (
    ComputationError,
    ComputationOk,
    ComputationResult,
    ComputationWarning,
    DayEntry,
    DayType,
    HolidayCreditingMode,
    PayMode,
    PaySettings,
    SegmentValidationError,
    TimeSegment,
    TotalsSummary,
    VacationCreditingMode,
    WeekStart,
    to_day,
)
from wagebook.domain.rules import (
    apply_tolerance_correction,
    ceil_div,
    legal_minimum_break_seconds,
    round_half_away,
)

logger = logging.getLogger(__name__)


class WorkedSecondsError(ValueError):
    """A day's raw input cannot be turned into worked seconds."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CreditSource(str, Enum):
    """Where the credited value of a vacation/holiday/sick day comes from."""
    OVERRIDE = "override"
    DAY_VALUE = "dayValue"
    FIXED_VALUE = "fixedValue"
    HOLIDAY_DISTRIBUTED = "holidayDistributed"
    LOOKBACK = "lookback"


class CalculationService:
    """
    The calculation engine. Knows nothing about storage or presentation.
    """

    # Segment validation

    def validate_segments(self, segments: Iterable[TimeSegment],
                          day_type: DayType) -> List[SegmentValidationError]:
        """
        Check segments for temporal sanity. At most one error per segment.

        Break checks only apply to work days; other day types ignore pauses.
        """
        errors = []
        for segment in segments:
            if segment.end < segment.start:
                errors.append(SegmentValidationError(message="End time must be after start time."))
                continue
            if day_type == DayType.WORK:
                if segment.break_seconds < 0:
                    errors.append(SegmentValidationError(message="Break cannot be negative."))
                elif segment.break_seconds > segment.duration_seconds:
                    errors.append(SegmentValidationError(message="Break exceeds segment duration."))
        return errors

    # Worked seconds

    def worked_seconds(self, day: DayEntry) -> int:
        """
        Net worked seconds of a day.

        Raises:
            WorkedSecondsError: negative manual value or invalid segments
        """
        if day.manual_worked_seconds is not None:
            manual = day.manual_worked_seconds
            if manual < 0:
                raise WorkedSecondsError("Manual worked seconds cannot be negative.")
            if day.type == DayType.WORK:
                return apply_tolerance_correction(manual)
            return manual

        errors = self.validate_segments(day.segments, day.type)
        if errors:
            raise WorkedSecondsError(" ".join(error.message for error in errors))

        presence_seconds = sum(max(0, segment.duration_seconds) for segment in day.segments)
        if day.type != DayType.WORK:
            return presence_seconds

        explicit_break_seconds = sum(max(0, segment.break_seconds) for segment in day.segments)
        net_worked_seconds = max(0, presence_seconds - explicit_break_seconds)

        required_break = legal_minimum_break_seconds(net_worked_seconds)
        missing_break_complement = max(0, required_break - explicit_break_seconds)

        # Tolerance applies to the net value before the missing break is taken off
        return max(0, apply_tolerance_correction(net_worked_seconds) - missing_break_complement)

    # Pay

    def pay_cents(self, seconds: int, settings: PaySettings) -> int:
        """Convert worked seconds to cents. 0 when the pay settings are incomplete."""
        match settings.pay_mode:
            case PayMode.HOURLY:
                if settings.hourly_rate_cents is None:
                    return 0
                return round_half_away(seconds * settings.hourly_rate_cents, 3600)
            case PayMode.MONTHLY:
                salary = settings.monthly_salary_cents
                weekly_target = settings.weekly_target_seconds
                if salary is None or weekly_target is None or weekly_target <= 0:
                    return 0
                # hourly rate = salary / (weekly_target * 52 / 12 / 3600)
                return round_half_away(seconds * salary * 12, weekly_target * 52)
            case _:
                assert_never(settings.pay_mode)

    def monthly_net_euro(self, gross_euro: float, bonuses_euro: float,
                         wage_tax_percent: Optional[float] = None,
                         pension_percent: Optional[float] = None,
                         monthly_allowance_euro: Optional[float] = None) -> float:
        """
        Rough net estimate: wage tax on gross above the allowance, pension on gross.
        """
        gross_monthly = max(0.0, gross_euro + bonuses_euro)
        wage_tax_rate = max(0.0, (wage_tax_percent or 0.0) / 100.0)
        pension_rate = max(0.0, (pension_percent or 0.0) / 100.0)
        allowance = max(0.0, monthly_allowance_euro or 0.0)

        taxable_base = max(0.0, gross_monthly - allowance)
        wage_tax = taxable_base * wage_tax_rate
        pension = gross_monthly * pension_rate

        return gross_monthly - wage_tax - pension

    # Day computation

    def day_computation(self, day: DayEntry, all_entries: Iterable[DayEntry],
                        settings: PaySettings,
                        entries_by_date: Optional[Dict[datetime.date, DayEntry]] = None) -> ComputationResult:
        """Compute one day. Never raises; failures come back as ComputationError."""
        match day.type:
            case DayType.WORK | DayType.MANUAL:
                try:
                    seconds = self.worked_seconds(day)
                except WorkedSecondsError as e:
                    return ComputationError(message=e.message, missing_dates=[])
                return self._ok(seconds, settings)
            case DayType.VACATION | DayType.HOLIDAY | DayType.SICK:
                return self._credited_computation(day, all_entries, settings, entries_by_date)
            case _:
                assert_never(day.type)

    def resolve_credit_source(self, day: DayEntry, settings: PaySettings) -> CreditSource:
        """
        Precedence for credited days:
        credited override > the day's own value > fixed/distributed setting > lookback.
        """
        if day.credited_override_seconds is not None:
            return CreditSource.OVERRIDE
        if not day.is_empty_tracked_day:
            return CreditSource.DAY_VALUE
        if (day.type == DayType.VACATION
                and settings.vacation_crediting_mode == VacationCreditingMode.FIXED_VALUE):
            return CreditSource.FIXED_VALUE
        if (day.type == DayType.HOLIDAY
                and settings.holiday_crediting_mode == HolidayCreditingMode.WEEKLY_TARGET_DISTRIBUTED):
            return CreditSource.HOLIDAY_DISTRIBUTED
        return CreditSource.LOOKBACK

    def _credited_computation(self, day: DayEntry, all_entries: Iterable[DayEntry],
                              settings: PaySettings,
                              entries_by_date: Optional[Dict[datetime.date, DayEntry]]) -> ComputationResult:
        source = self.resolve_credit_source(day, settings)
        match source:
            case CreditSource.OVERRIDE:
                return self._ok(max(0, day.credited_override_seconds), settings)
            case CreditSource.DAY_VALUE:
                try:
                    seconds = self.worked_seconds(day)
                except WorkedSecondsError as e:
                    return ComputationError(message=e.message, missing_dates=[])
                return self._ok(seconds, settings)
            case CreditSource.FIXED_VALUE:
                return self._ok(settings.vacation_fixed_seconds or 0, settings)
            case CreditSource.HOLIDAY_DISTRIBUTED:
                return self._ok(self.holiday_credited_seconds(settings), settings)
            case CreditSource.LOOKBACK:
                return self.credited_result(day, all_entries, settings, entries_by_date)
            case _:
                assert_never(source)

    def holiday_credited_seconds(self, settings: PaySettings) -> int:
        """Value of a holiday when the weekly target is spread over the workdays."""
        match settings.holiday_crediting_mode:
            case HolidayCreditingMode.ZERO:
                return 0
            case HolidayCreditingMode.WEEKLY_TARGET_DISTRIBUTED:
                if settings.weekly_target_seconds is None:
                    return 0
                workdays = max(1, min(7, settings.scheduled_workdays_count))
                return settings.weekly_target_seconds // workdays
            case _:
                assert_never(settings.holiday_crediting_mode)

    def credited_result(self, day: DayEntry, all_entries: Iterable[DayEntry],
                        settings: PaySettings,
                        entries_by_date: Optional[Dict[datetime.date, DayEntry]] = None) -> ComputationResult:
        """
        Average worked seconds of the same weekday over the last N weeks.

        Only dates in [day - 7N days, day - 7 days] on the same weekday are
        read. Missing history is never estimated silently: depending on the
        settings it counts as zero or turns the result into an error.
        """
        lookback = max(1, settings.vacation_lookback_count)
        if entries_by_date is None:
            entries_by_date = self.entries_by_date(all_entries)

        values: List[int] = []
        missing_dates: List[datetime.date] = []

        for index in range(1, lookback + 1):
            reference = day.date - datetime.timedelta(days=7 * index)
            ref_entry = entries_by_date.get(reference)

            if ref_entry is None:
                missing_dates.append(reference)
                if settings.count_missing_as_zero:
                    values.append(0)
                continue

            if ref_entry.is_empty_tracked_day:
                values.append(0)
                continue

            try:
                values.append(self.worked_seconds(ref_entry))
            except WorkedSecondsError as e:
                logger.debug(f"Lookback for {day.date} hit invalid reference {reference}: {e.message}")
                return ComputationError(
                    message=f"Reference day has invalid data: {e.message}",
                    missing_dates=[reference]
                )

        if settings.strict_history_required and missing_dates:
            return ComputationError(
                message=f"Insufficient {lookback}-week history for strict mode.",
                missing_dates=missing_dates
            )

        if not settings.count_missing_as_zero and missing_dates:
            return ComputationError(
                message="Missing reference entries. Enable 'count missing as zero' or create entries.",
                missing_dates=missing_dates
            )

        if len(values) < lookback:
            return ComputationError(
                message="Not enough reference values available.",
                missing_dates=missing_dates
            )

        # Rounded up to the next whole minute
        average = ceil_div(sum(values), lookback * 60) * 60

        if all(value == 0 for value in values):
            return ComputationWarning(
                value_seconds=0,
                value_cents=0,
                message=f"All {lookback} lookback values are 0."
            )

        logger.debug(f"Lookback for {day.date}: {len(missing_dates)} missing, average {average}s")
        return self._ok(average, settings)

    # Periods

    def week_start_date(self, day, week_start: WeekStart) -> datetime.date:
        """First day of the week containing the given day."""
        normalized = to_day(day)
        match week_start:
            case WeekStart.MONDAY:
                diff = normalized.weekday()
            case WeekStart.SUNDAY:
                diff = (normalized.weekday() + 1) % 7
            case _:
                assert_never(week_start)
        return normalized - datetime.timedelta(days=diff)

    def period_summary(self, entries: Iterable[DayEntry], start_date, end_date,
                       settings: PaySettings) -> TotalsSummary:
        """
        Totals over [start_date, end_date] (inclusive).

        Errored days are left out of the totals; one bad day never aborts
        the period.
        """
        entries = list(entries)
        start_day = to_day(start_date)
        end_day = to_day(end_date)
        lookup = self.entries_by_date(entries)
        summary = TotalsSummary()

        for day in entries:
            if not start_day <= day.date <= end_day:
                continue

            result = self.day_computation(day, entries, settings, lookup)
            match result:
                case ComputationOk(value_seconds=seconds, value_cents=cents):
                    summary.total_seconds += seconds
                    summary.total_cents += cents
                case ComputationWarning(value_seconds=seconds, value_cents=cents):
                    summary.total_seconds += seconds
                    summary.total_cents += cents
                    summary.warning_count += 1
                case ComputationError(message=message):
                    logger.warning(f"Excluding {day.date} ({day.type.value}) from totals: {message}")
                    if day.type in (DayType.VACATION, DayType.SICK):
                        summary.errored_days_count += 1
                case _:
                    assert_never(result)

        return summary

    # Helpers

    @staticmethod
    def entries_by_date(entries: Iterable[DayEntry]) -> Dict[datetime.date, DayEntry]:
        return {entry.date: entry for entry in entries}

    def _ok(self, seconds: int, settings: PaySettings) -> ComputationOk:
        return ComputationOk(value_seconds=seconds, value_cents=self.pay_cents(seconds, settings))
