"""
Age Buckets

Derives the age groups for an aged-metrics report from the requested
frequency and date filter, and measures a payment's age in calendar
units.
"""

from datetime import date, datetime, timedelta, UTC
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


DEFAULT_FREQUENCY = "daily"
DEFAULT_DATE_FILTER = "last_7_days"


class Frequency(str, Enum):
    """Reporting granularity."""

    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Frequency":
        """Parse a caller-supplied frequency; unknown or absent means daily."""
        try:
            return cls((value or DEFAULT_FREQUENCY).lower())
        except ValueError:
            return cls(DEFAULT_FREQUENCY)


class AgeUnit(str, Enum):
    """Calendar unit an age group is measured in."""

    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"


FREQUENCY_UNITS = {
    Frequency.HOURLY: AgeUnit.HOURS,
    Frequency.DAILY: AgeUnit.DAYS,
    Frequency.WEEKLY: AgeUnit.WEEKS,
    Frequency.MONTHLY: AgeUnit.MONTHS,
}

# frequency -> {date filter token: bucket count}, plus a fallback count
# for tokens the frequency does not recognise
BUCKET_COUNTS = {
    Frequency.HOURLY: (
        {
            "last_24_hours": 24,
            "today": 24,
            "yesterday": 24,
        },
        24,
    ),
    Frequency.WEEKLY: (
        {
            "last_7_days": 1,
            "last_week": 1,
            "last_28_days": 4,
            "last_30_days": 4,
            "last_month": 4,
            "last_1_month": 4,
            "last_90_days": 13,
        },
        8,
    ),
    Frequency.MONTHLY: (
        {
            "last_30_days": 1,
            "last_month": 1,
            "last_1_month": 1,
            "last_90_days": 3,
            "last_7_days": 1,
            "last_28_days": 1,
        },
        6,
    ),
    Frequency.DAILY: (
        {
            "last_24_hours": 1,
            "today": 1,
            "yesterday": 1,
            "last_7_days": 7,
            "last_week": 7,
            "last_28_days": 28,
            "last_30_days": 30,
            "last_month": 30,
            "last_1_month": 30,
            "last_90_days": 90,
        },
        7,
    ),
}


class AgeGroupSpec(BaseModel):
    """A half-open age range [min_bound, max_bound) in a single unit."""

    label: str = Field(description="Display label")
    min_bound: int = Field(ge=0, description="Inclusive lower bound")
    max_bound: int = Field(gt=0, description="Exclusive upper bound")
    unit: AgeUnit = Field(description="Unit the bounds are measured in")

    def contains(self, age: int) -> bool:
        return self.min_bound <= age < self.max_bound


def bucket_count(
    date_filter: Optional[str],
    frequency: Optional[str] = None,
) -> Tuple[int, AgeUnit]:
    """
    Number of age buckets and their unit for a frequency and date filter.

    Args:
        date_filter: Date filter token (defaults to last_7_days)
        frequency: Reporting frequency (defaults to daily)

    Returns:
        Tuple of (bucket count, unit)
    """
    freq = Frequency.parse(frequency)
    token = date_filter if date_filter is not None else DEFAULT_DATE_FILTER

    counts, fallback = BUCKET_COUNTS[freq]
    return counts.get(token, fallback), FREQUENCY_UNITS[freq]


def _label(freq: Frequency, i: int) -> str:
    if freq == Frequency.HOURLY:
        return f"{i}h ago"
    if freq == Frequency.WEEKLY:
        return f"Week {i + 1}"
    if freq == Frequency.MONTHLY:
        return f"Month {i + 1}"
    if i == 0:
        return "Today"
    if i == 1:
        return "Yesterday"
    return f"{i} days ago"


def build_age_groups(
    date_filter: Optional[str],
    frequency: Optional[str] = None,
) -> List[AgeGroupSpec]:
    """
    Build the ordered, contiguous age groups for a report.

    Group i covers ages [i, i + 1) in the frequency's unit, starting at 0.
    """
    freq = Frequency.parse(frequency)
    count, unit = bucket_count(date_filter, freq.value)

    return [
        AgeGroupSpec(label=_label(freq, i), min_bound=i, max_bound=i + 1, unit=unit)
        for i in range(count)
    ]


def ensure_utc(value: datetime) -> datetime:
    """Normalise to UTC; naive datetimes are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


def _adjusted_end_date(start: datetime, end: datetime) -> date:
    """
    End date for whole-day arithmetic.

    A calendar day only counts once the time of day has caught up with
    the start's time of day.
    """
    end_date = end.date()
    if end_date > start.date() and end.time() < start.time():
        end_date -= timedelta(days=1)
    elif end_date < start.date() and end.time() > start.time():
        end_date += timedelta(days=1)
    return end_date


def _months_between(start: datetime, end: datetime) -> int:
    end_date = _adjusted_end_date(start, end)
    packed_start = (start.year * 12 + start.month - 1) * 32 + start.day
    packed_end = (end_date.year * 12 + end_date.month - 1) * 32 + end_date.day
    return _trunc_div(packed_end - packed_start, 32)


def age_in_unit(created_at: datetime, now: datetime, unit: AgeUnit) -> int:
    """
    Whole calendar units elapsed from `created_at` to `now`.

    Partial units are truncated. Months are calendar months: 31 Jan to
    28 Feb is 0 months, 31 Jan to 1 Mar is 1 month.
    """
    start = ensure_utc(created_at)
    end = ensure_utc(now)

    if unit == AgeUnit.MONTHS:
        return _months_between(start, end)

    micros = (end - start) // timedelta(microseconds=1)
    if unit == AgeUnit.HOURS:
        return _trunc_div(micros, 3_600_000_000)

    days = _trunc_div(micros, 86_400_000_000)
    if unit == AgeUnit.WEEKS:
        return _trunc_div(days, 7)
    return days
