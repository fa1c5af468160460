"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
Day records come from the database, YAML settings and scripts. Pydantic
normalizes them once at the boundary (dates, clamped settings) so the
calculation engine can stay a set of plain functions over validated values.
"""

import datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class DayType(str, Enum):
    """Kind of a calendar day. Credited types are valued via lookback."""
    WORK = "work"
    MANUAL = "manual"
    VACATION = "vacation"
    HOLIDAY = "holiday"
    SICK = "sick"

    @property
    def is_credited(self) -> bool:
        return self in (DayType.VACATION, DayType.HOLIDAY, DayType.SICK)

    @property
    def label(self) -> str:
        return _DAY_TYPE_LABELS[self]


_DAY_TYPE_LABELS = {
    DayType.WORK: "Arbeit",
    DayType.MANUAL: "Manuell",
    DayType.VACATION: "Urlaub",
    DayType.HOLIDAY: "Feiertag",
    DayType.SICK: "Krank",
}


class PayMode(str, Enum):
    HOURLY = "hourly"
    MONTHLY = "monthly"


class WeekStart(str, Enum):
    MONDAY = "monday"
    SUNDAY = "sunday"


class HolidayCreditingMode(str, Enum):
    ZERO = "zero"
    WEEKLY_TARGET_DISTRIBUTED = "weeklyTargetDistributed"


class VacationCreditingMode(str, Enum):
    LOOKBACK_13_WEEKS = "lookback13Weeks"
    FIXED_VALUE = "fixedValue"


def to_day(value):
    """Normalize a datetime to its local calendar day."""
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


class TimeSegment(BaseModel):
    """
    One contiguous presence interval within a day.

    Ordering and break sign are checked by the segment validator, not here.
    """
    model_config = ConfigDict(from_attributes=True)

    start: datetime.datetime
    end: datetime.datetime
    break_seconds: int = 0

    @property
    def duration_seconds(self) -> int:
        return int((self.end - self.start).total_seconds())


class DayEntry(BaseModel):
    """
    One calendar day's record, keyed uniquely by its date.

    Examples: a work day with segments, a vacation day with no data
    (valued by lookback), a manual day with a typed-in duration.
    """
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    date: datetime.date
    type: DayType = DayType.WORK
    notes: str = ""
    segments: List[TimeSegment] = Field(default_factory=list)

    # Overrides segment-derived computation when present
    manual_worked_seconds: Optional[int] = None
    # Credited types only: bypasses lookback entirely
    credited_override_seconds: Optional[int] = None

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value):
        return to_day(value)

    @property
    def is_empty_tracked_day(self) -> bool:
        return self.manual_worked_seconds is None and not self.segments


class PaySettings(BaseModel):
    """
    Pay and crediting configuration.

    Passed explicitly into every engine call; the engine never looks it up.
    """
    model_config = ConfigDict(from_attributes=True)

    # Pay
    pay_mode: PayMode = PayMode.HOURLY
    hourly_rate_cents: Optional[int] = None
    monthly_salary_cents: Optional[int] = None
    weekly_target_seconds: Optional[int] = None
    week_start: WeekStart = WeekStart.MONDAY

    # Crediting of vacation / holiday / sick days
    vacation_lookback_count: int = Field(default=13, description="Weeks to look back on the same weekday")
    vacation_crediting_mode: VacationCreditingMode = VacationCreditingMode.LOOKBACK_13_WEEKS
    vacation_fixed_seconds: Optional[int] = None
    count_missing_as_zero: bool = Field(default=True, description="Missing reference days contribute 0")
    strict_history_required: bool = Field(default=False, description="Any missing reference day is an error")
    holiday_crediting_mode: HolidayCreditingMode = HolidayCreditingMode.ZERO
    scheduled_workdays_count: int = Field(default=5, description="Workdays per week, clamped to 1..7")

    # Holiday calendar
    holiday_country_code: Optional[str] = "DE"
    holiday_subdivision_code: Optional[str] = None
    mark_paid_holidays: bool = False
    paid_holiday_weekday_mask: Optional[int] = Field(
        default=None,
        description="Bit n set = paid on date.weekday() == n (Monday is bit 0)"
    )

    # Net wage defaults
    net_wage_tax_percent: Optional[float] = None
    net_pension_percent: Optional[float] = None
    net_monthly_allowance_euro: Optional[float] = None
    net_bonuses_csv: Optional[str] = None

    @field_validator("scheduled_workdays_count", mode="before")
    @classmethod
    def _clamp_workdays(cls, value):
        return min(max(int(value), 1), 7)

    @field_validator("vacation_fixed_seconds")
    @classmethod
    def _clamp_fixed_seconds(cls, value):
        return None if value is None else max(0, value)

    @field_validator("paid_holiday_weekday_mask")
    @classmethod
    def _sanitize_mask(cls, value):
        return None if value is None else value & 0b1111111

    @property
    def effective_paid_holiday_weekday_mask(self) -> int:
        if self.paid_holiday_weekday_mask is not None:
            return self.paid_holiday_weekday_mask
        return default_weekday_mask(self.week_start, self.scheduled_workdays_count)


def default_weekday_mask(week_start: WeekStart, scheduled_workdays_count: int) -> int:
    """Mask of the first N weekdays counted from the start of the week."""
    count = min(max(scheduled_workdays_count, 1), 7)
    if week_start == WeekStart.SUNDAY:
        ordered = [6, 0, 1, 2, 3, 4, 5]
    else:
        ordered = [0, 1, 2, 3, 4, 5, 6]

    mask = 0
    for weekday in ordered[:count]:
        mask |= 1 << weekday
    return mask


class NetWageMonthConfig(BaseModel):
    """Net wage inputs for one month. Falls back to the previous month."""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    month_start: datetime.date
    wage_tax_percent: Optional[float] = None
    pension_percent: Optional[float] = None
    monthly_allowance_euro: Optional[float] = None
    bonuses_csv: str = ""

    @field_validator("month_start", mode="before")
    @classmethod
    def _month_day(cls, value):
        return to_day(value)

    @field_validator("month_start")
    @classmethod
    def _normalize_month(cls, value: datetime.date) -> datetime.date:
        return value.replace(day=1)


class HolidayCalendarDay(BaseModel):
    """A public holiday of one country/subdivision."""
    model_config = ConfigDict(from_attributes=True)

    date: datetime.date
    local_name: str
    country_code: str
    subdivision_code: Optional[str] = None
    source_year: int

    @field_validator("country_code")
    @classmethod
    def _upper_country(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("subdivision_code")
    @classmethod
    def _upper_subdivision(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip().upper()
        return value or None

    @computed_field
    @property
    def key(self) -> str:
        return make_holiday_key(self.date, self.country_code, self.subdivision_code)


def make_holiday_key(day: datetime.date, country_code: str, subdivision_code: Optional[str]) -> str:
    subdivision = subdivision_code.upper() if subdivision_code else "ALL"
    return f"{country_code.upper()}-{subdivision}-{day.isoformat()}"


class SegmentValidationError(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str


class _ResultMixin:
    @property
    def value_seconds_or_zero(self) -> int:
        return getattr(self, "value_seconds", 0)

    @property
    def value_cents_or_zero(self) -> int:
        return getattr(self, "value_cents", 0)

    @property
    def is_error(self) -> bool:
        return isinstance(self, ComputationError)


class ComputationOk(_ResultMixin, BaseModel):
    """Fully resolved, no caveats."""
    model_config = ConfigDict(frozen=True)

    status: Literal["ok"] = "ok"
    value_seconds: int
    value_cents: int


class ComputationWarning(_ResultMixin, BaseModel):
    """Resolved but degraded. Still counted in totals."""
    model_config = ConfigDict(frozen=True)

    status: Literal["warning"] = "warning"
    value_seconds: int
    value_cents: int
    message: str


class ComputationError(_ResultMixin, BaseModel):
    """Unresolved. The day is excluded from totals."""
    model_config = ConfigDict(frozen=True)

    status: Literal["error"] = "error"
    message: str
    missing_dates: List[datetime.date] = Field(default_factory=list)


ComputationResult = Annotated[
    Union[ComputationOk, ComputationWarning, ComputationError],
    Field(discriminator="status"),
]


class TotalsSummary(BaseModel):
    """Aggregate over a date range. Built fresh per query."""
    total_seconds: int = 0
    total_cents: int = 0
    warning_count: int = 0
    errored_days_count: int = 0
    omitted_value_text: str = "Not estimated"
