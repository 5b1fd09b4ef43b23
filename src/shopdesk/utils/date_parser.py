"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_OFFSET_RE = re.compile(r"^([+-])\s*(\d+)\s*([dwmy])$")


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative words: "today", "yesterday", "tomorrow"
    - Offsets from today: "+30d", "-1w", "+1m", "+1y"

    Args:
        date_str: Date string in various formats
        today: Reference date for relative forms (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if today is None:
        today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    match = _OFFSET_RE.match(date_str)
    if match:
        sign, count, unit = match.groups()
        amount = int(count) * (-1 if sign == "-" else 1)
        if unit == "d":
            return today + timedelta(days=amount)
        elif unit == "w":
            return today + timedelta(weeks=amount)
        elif unit == "m":
            return today + relativedelta(months=amount)
        else:
            return today + relativedelta(years=amount)

    # ISO first so that 2024-03-04 is never read day-first
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, OverflowError, TypeError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
