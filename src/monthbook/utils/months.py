"""Calendar month helpers."""

import calendar
from datetime import date, datetime
from typing import Union

from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime]


def last_day_of_month(year: int, month: int) -> int:
    """Return the last calendar day (28-31) of a 1-based month."""
    return calendar.monthrange(year, month)[1]


def month_start(value: DateLike) -> date:
    """Return the first day of the month containing ``value``."""
    return date(value.year, value.month, 1)


def month_end(value: DateLike) -> date:
    """Return the last day of the month containing ``value``."""
    return date(value.year, value.month, last_day_of_month(value.year, value.month))


def same_month(a: DateLike, b: DateLike) -> bool:
    """Check whether two dates fall in the same month and year."""
    return a.year == b.year and a.month == b.month


def month_index(value: DateLike) -> int:
    """Return a sortable month ordinal (year * 12 + zero-based month)."""
    return value.year * 12 + (value.month - 1)


def month_key(value: DateLike) -> str:
    """Format the month of ``value`` as ``MM/YYYY``.

    This is the entry format of ``excluded_months`` sets.
    """
    return f"{value.month:02d}/{value.year:04d}"


def parse_month_key(key: str) -> date:
    """Parse a ``MM/YYYY`` key into the first day of that month.

    Raises:
        ValueError: If the key is malformed
    """
    parts = key.strip().split("/")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Invalid month key '{key}', expected MM/YYYY")
    month, year = int(parts[0]), int(parts[1])
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month key '{key}': month must be 01-12")
    return date(year, month, 1)


def month_sequence(center: DateLike, months_before: int = 12, months_after: int = 12) -> list[date]:
    """Generate a contiguous window of month start dates around ``center``.

    Args:
        center: Any date inside the center month
        months_before: Number of months before the center month
        months_after: Number of months after the center month

    Returns:
        Ascending list of first-of-month dates, always including the center month
    """
    if months_before < 0 or months_after < 0:
        raise ValueError("Month window bounds must be non-negative")
    anchor = month_start(center)
    return [
        anchor + relativedelta(months=offset)
        for offset in range(-months_before, months_after + 1)
    ]
