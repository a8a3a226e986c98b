"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from squirrel.domain.grammar import DATETIME_RE

_YEAR_MONTH_RE = re.compile(r"^(\d{4})-?(\d{2})$")


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this month", etc.

    Args:
        date_str: Date string in various formats
        today: Reference date for relative dates (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    elif date_str.startswith("next "):
        period = date_str[5:]
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def year_month(day: date) -> str:
    """Return ``YYYYMM`` for a date."""
    return f"{day.year:04d}{day.month:02d}"


def current_year_month(today: Optional[date] = None) -> str:
    """Return the current month as ``YYYYMM``."""
    return year_month(today or date.today())


def parse_year_month(value: str, today: Optional[date] = None) -> str:
    """Parse a month selector into ``YYYYMM``.

    Accepts "202601", "2026-01", or anything parse_date understands
    ("today", "last month", "2026-01-15").

    Raises:
        ValueError: If the value cannot be parsed
    """
    value = value.strip()
    match = _YEAR_MONTH_RE.match(value)
    if match:
        month = int(match.group(2))
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month in '{value}'")
        return f"{match.group(1)}{match.group(2)}"
    return year_month(parse_date(value, today=today))


def parse_ledger_datetime(value: str, today: Optional[date] = None) -> str:
    """Return a ledger header datetime for user input.

    Full ledger datetimes (``2026-01-15T09:30:00Z``) pass through unchanged;
    anything else is parsed as a date and rendered as ``YYYY-MM-DD``.

    Raises:
        ValueError: If the value cannot be parsed
    """
    value = value.strip()
    if DATETIME_RE.match(value):
        return value
    return parse_date(value, today=today).isoformat()
