"""
Tests for the pay converter and the net estimate.
"""

import pytest

from wagebook.domain.models import PayMode, PaySettings
from wagebook.domain.rules import round_half_away


class TestHourlyPay:

    @pytest.mark.parametrize("seconds,rate,expected", [
        (3600, 2000, 2000),
        (5400, 2000, 3000),
        (28800, 1550, 12400),
        (1, 1800, 1),   # 0.5 cents rounds away from zero
        (1, 1799, 0),
        (0, 2000, 0),
    ])
    def test_hourly(self, service, seconds, rate, expected):
        settings = PaySettings(pay_mode=PayMode.HOURLY, hourly_rate_cents=rate)
        assert service.pay_cents(seconds, settings) == expected

    def test_missing_rate_is_zero(self, service):
        assert service.pay_cents(3600, PaySettings(pay_mode=PayMode.HOURLY)) == 0


class TestMonthlyPay:

    def test_monthly_salary_to_hourly(self, service):
        # 3000.00 per month at 40h/week is 17.3077 per hour
        settings = PaySettings(
            pay_mode=PayMode.MONTHLY,
            monthly_salary_cents=300000,
            weekly_target_seconds=40 * 3600
        )
        assert service.pay_cents(3600, settings) == 1731
        assert service.pay_cents(0, settings) == 0

    def test_full_month_of_target_equals_salary(self, service):
        settings = PaySettings(
            pay_mode=PayMode.MONTHLY,
            monthly_salary_cents=300000,
            weekly_target_seconds=40 * 3600
        )
        # 52 weeks / 12 months of the weekly target
        monthly_target = 40 * 3600 * 52 // 12
        assert service.pay_cents(monthly_target, settings) == 300000

    @pytest.mark.parametrize("salary,weekly_target", [
        (None, 40 * 3600),
        (300000, None),
        (300000, 0),
    ])
    def test_incomplete_settings_are_zero(self, service, salary, weekly_target):
        settings = PaySettings(
            pay_mode=PayMode.MONTHLY,
            monthly_salary_cents=salary,
            weekly_target_seconds=weekly_target
        )
        assert service.pay_cents(3600, settings) == 0


class TestRounding:

    @pytest.mark.parametrize("numerator,denominator,expected", [
        (5, 2, 3),
        (-5, 2, -3),
        (4, 3, 1),
        (-4, 3, -1),
        (7, -2, -4),
        (0, 9, 0),
    ])
    def test_round_half_away(self, numerator, denominator, expected):
        assert round_half_away(numerator, denominator) == expected


class TestMonthlyNet:

    def test_tax_above_allowance_and_pension(self, service):
        net = service.monthly_net_euro(
            gross_euro=3000.0,
            bonuses_euro=200.0,
            wage_tax_percent=20.0,
            pension_percent=10.0,
            monthly_allowance_euro=1000.0
        )
        # 3200 - 20% of 2200 - 10% of 3200
        assert net == pytest.approx(2440.0)

    def test_no_deductions(self, service):
        assert service.monthly_net_euro(1500.0, 0.0) == pytest.approx(1500.0)

    def test_negative_gross_clamps_to_zero(self, service):
        assert service.monthly_net_euro(-100.0, 0.0, wage_tax_percent=20.0) == pytest.approx(0.0)

    def test_negative_rates_are_ignored(self, service):
        net = service.monthly_net_euro(1000.0, 0.0, wage_tax_percent=-10.0, pension_percent=-5.0)
        assert net == pytest.approx(1000.0)

    def test_allowance_above_gross(self, service):
        net = service.monthly_net_euro(800.0, 0.0, wage_tax_percent=30.0, monthly_allowance_euro=1200.0)
        assert net == pytest.approx(800.0)
