"""Calendar arithmetic shared by all renderers.

All helpers work on naive local ``datetime`` values. Renderers never read the
clock themselves; callers pass a single ``now`` per render call.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta

ONE_DAY = timedelta(days=1)
ONE_WEEK = timedelta(weeks=1)
AVERAGE_YEAR = timedelta(days=365.25)

LONG_DATE = "{month} {day}, {year}"

_MONTH_NAMES: dict[str, tuple[str, ...]] = {
    "en-US": (
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    ),
}


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def day_of_year(moment: datetime) -> int:
    """1-based ordinal of ``moment`` within its year (Jan 1 -> 1)."""
    last_day_before = datetime(moment.year, 1, 1) - ONE_DAY
    return (moment - last_day_before) // ONE_DAY


def day_span(start: datetime, end: datetime) -> int:
    """Whole days from ``start`` to ``end``, rounded up. Negative when end < start."""
    return math.ceil((end - start) / ONE_DAY)


def weeks_since(start: datetime, now: datetime) -> int:
    """Fully elapsed weeks between ``start`` and ``now`` (floor, not round)."""
    return (now - start) // ONE_WEEK


def age_in_years(birth: datetime, now: datetime) -> int:
    return math.floor((now - birth) / AVERAGE_YEAR)


def start_of_year(moment: datetime) -> datetime:
    return datetime(moment.year, 1, 1)


def end_of_year(moment: datetime) -> datetime:
    return datetime(moment.year, 12, 31)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def format_percent(ratio: float) -> str:
    return f"{ratio * 100:.1f}"


def local_naive(moment: datetime) -> datetime:
    """Drop an explicit UTC offset by converting to local wall-clock time."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def parse_date(text: str) -> datetime:
    """Parse ``YYYY-MM-DD`` (time part optional) into a naive local datetime."""
    value = text.strip()
    if not value:
        raise ValueError("Empty date string")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"Invalid date {text!r}; expected YYYY-MM-DD") from exc
    return local_naive(parsed)


def format_date(moment: datetime, pattern: str = LONG_DATE, locale: str = "en-US") -> str:
    months = _MONTH_NAMES.get(locale)
    if months is None:
        raise ValueError(f"Unsupported locale: {locale}")
    return pattern.format(month=months[moment.month - 1], day=moment.day, year=moment.year)
