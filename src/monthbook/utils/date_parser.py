"""Date and month parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from monthbook.utils.months import month_start, parse_month_key


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow"

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_month(month_str: str) -> date:
    """Parse a month reference into the first day of that month.

    Supports:
    - Month keys: "04/2024"
    - ISO months: "2024-04"
    - Relative months: "this month", "last month", "next month"
    - Any date accepted by parse_date (the containing month is returned)

    Raises:
        ValueError: If the string cannot be parsed
    """
    text = month_str.strip().lower()
    today = date.today()

    if text == "this month":
        return month_start(today)
    if text == "last month":
        return month_start(today) - relativedelta(months=1)
    if text == "next month":
        return month_start(today) + relativedelta(months=1)

    if "/" in text and text.count("/") == 1:
        return parse_month_key(text)

    parts = text.split("-")
    if len(parts) == 2 and all(part.isdigit() for part in parts):
        year, month = int(parts[0]), int(parts[1])
        if not 1 <= month <= 12:
            raise ValueError(f"Could not parse month '{month_str}': month must be 1-12")
        return date(year, month, 1)

    return month_start(parse_date(text))
