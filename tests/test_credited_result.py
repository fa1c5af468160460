"""
Tests for the same-weekday lookback of vacation, holiday and sick days.
"""

import datetime
import pytest

from wagebook.domain.models import (
    ComputationError,
    ComputationOk,
    ComputationWarning,
    DayEntry,
    DayType,
    PaySettings,
)

TARGET = datetime.date(2026, 5, 13)


def reference(weeks_back: int) -> datetime.date:
    return TARGET - datetime.timedelta(days=7 * weeks_back)


def worked(day: datetime.date, seconds: int, day_type: DayType = DayType.MANUAL) -> DayEntry:
    return DayEntry(date=day, type=day_type, manual_worked_seconds=seconds)


@pytest.fixture
def vacation() -> DayEntry:
    return DayEntry(date=TARGET, type=DayType.VACATION)


class TestLookbackAverage:

    def test_full_history(self, service, vacation):
        settings = PaySettings(hourly_rate_cents=2000, strict_history_required=True)
        entries = [worked(reference(i), 28800) for i in range(1, 14)]

        result = service.credited_result(vacation, entries + [vacation], settings)

        assert result == ComputationOk(value_seconds=28800, value_cents=16000)

    def test_single_reference_counts_missing_as_zero(self, service, vacation, hourly_settings):
        entries = [worked(reference(1), 28800), vacation]

        result = service.credited_result(vacation, entries, hourly_settings)

        # 28800 / 13 = 2215.38, rounded up to the next whole minute
        assert isinstance(result, ComputationOk)
        assert result.value_seconds == 2220

    def test_average_rounds_up_to_minute(self, service, vacation, hourly_settings):
        result = service.credited_result(vacation, [worked(reference(3), 13000)], hourly_settings)
        assert result.value_seconds == 1020

    def test_exact_minute_average_is_kept(self, service, vacation):
        settings = PaySettings(vacation_lookback_count=2)
        entries = [worked(reference(1), 3600), worked(reference(2), 7200)]
        assert service.credited_result(vacation, entries, settings).value_seconds == 5400

    def test_work_reference_uses_corrected_value(self, service, vacation):
        settings = PaySettings(vacation_lookback_count=1)
        entries = [worked(reference(1), 6 * 3600 + 600, DayType.WORK)]
        assert service.credited_result(vacation, entries, settings).value_seconds == 6 * 3600

    def test_manual_reference_is_not_corrected(self, service, vacation):
        settings = PaySettings(vacation_lookback_count=1)
        entries = [worked(reference(1), 6 * 3600 + 600)]
        assert service.credited_result(vacation, entries, settings).value_seconds == 6 * 3600 + 600

    def test_credited_reference_counts_its_recorded_value(self, service, vacation):
        settings = PaySettings(vacation_lookback_count=1)
        entries = [worked(reference(1), 4 * 3600, DayType.SICK)]
        assert service.credited_result(vacation, entries, settings).value_seconds == 4 * 3600

    def test_only_window_days_are_read(self, service, vacation):
        settings = PaySettings(vacation_lookback_count=2)
        entries = [
            worked(reference(1), 3600),
            worked(reference(2), 7200),
            # Outside the window or on other weekdays
            worked(reference(3), 99999),
            worked(TARGET - datetime.timedelta(days=1), 99999),
            worked(TARGET - datetime.timedelta(days=8), 99999),
            worked(TARGET + datetime.timedelta(days=7), 99999),
        ]
        assert service.credited_result(vacation, entries, settings).value_seconds == 5400

    def test_prebuilt_lookup_gives_same_result(self, service, vacation, hourly_settings):
        entries = [worked(reference(i), 3600 * i) for i in range(1, 6)]
        lookup = service.entries_by_date(entries)

        assert (service.credited_result(vacation, entries, hourly_settings, lookup)
                == service.credited_result(vacation, entries, hourly_settings))

    def test_lookback_count_below_one_reads_one_week(self, service, vacation):
        settings = PaySettings(vacation_lookback_count=0)
        entries = [worked(reference(1), 3600), worked(reference(2), 7200)]
        assert service.credited_result(vacation, entries, settings).value_seconds == 3600


class TestLookbackWarnings:

    def test_no_history_is_a_warning(self, service, vacation, hourly_settings):
        result = service.credited_result(vacation, [vacation], hourly_settings)

        assert result == ComputationWarning(
            value_seconds=0,
            value_cents=0,
            message="All 13 lookback values are 0."
        )

    def test_empty_reference_days_count_as_zero(self, service, vacation, hourly_settings):
        entries = [DayEntry(date=reference(i), type=DayType.WORK) for i in range(1, 14)]
        result = service.credited_result(vacation, entries, hourly_settings)
        assert isinstance(result, ComputationWarning)

    def test_custom_lookback_count_in_message(self, service, vacation):
        settings = PaySettings(vacation_lookback_count=4)
        result = service.credited_result(vacation, [], settings)
        assert result.message == "All 4 lookback values are 0."


class TestLookbackErrors:

    def test_strict_mode_reports_missing_day(self, service, vacation):
        settings = PaySettings(strict_history_required=True, count_missing_as_zero=True)
        entries = [worked(reference(i), 28800) for i in range(1, 14) if i != 5]

        result = service.credited_result(vacation, entries, settings)

        assert result == ComputationError(
            message="Insufficient 13-week history for strict mode.",
            missing_dates=[reference(5)]
        )

    def test_strict_mode_takes_precedence(self, service, vacation):
        settings = PaySettings(
            vacation_lookback_count=2,
            strict_history_required=True,
            count_missing_as_zero=False
        )
        result = service.credited_result(vacation, [], settings)
        assert result.message == "Insufficient 2-week history for strict mode."
        assert result.missing_dates == [reference(1), reference(2)]

    def test_missing_without_zero_fill(self, service, vacation):
        settings = PaySettings(vacation_lookback_count=3, count_missing_as_zero=False)
        entries = [worked(reference(2), 3600)]

        result = service.credited_result(vacation, entries, settings)

        assert result == ComputationError(
            message="Missing reference entries. Enable 'count missing as zero' or create entries.",
            missing_dates=[reference(1), reference(3)]
        )

    def test_invalid_reference_day(self, service, vacation, hourly_settings):
        entries = [worked(reference(1), 3600), worked(reference(2), -60, DayType.WORK)]

        result = service.credited_result(vacation, entries, hourly_settings)

        assert result == ComputationError(
            message="Reference day has invalid data: Manual worked seconds cannot be negative.",
            missing_dates=[reference(2)]
        )

    def test_missing_dates_are_ordered_newest_first(self, service, vacation):
        settings = PaySettings(strict_history_required=True)
        result = service.credited_result(vacation, [], settings)
        assert result.missing_dates == [reference(i) for i in range(1, 14)]
