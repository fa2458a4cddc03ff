"""
Date utilities for parsing periods and month ranges.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Tuple


def parse_period(period: str) -> Tuple[str, str]:
    """
    Parse a period string into (start_date, end_date).

    Supported periods:
    - "this_month", "last_month"
    - "YYYY-MM" (a specific month)

    Every period is one calendar month; budgets and category totals are
    monthly.

    Returns:
        Tuple of (start_date, end_date) as "YYYY-MM-DD" strings

    Raises:
        ValueError: If period is not recognized
    """
    today = datetime.now()

    if period == "this_month":
        return get_month_range(today.year, today.month)

    elif period == "last_month":
        first_day_this_month = today.replace(day=1)
        last_day_last_month = first_day_this_month - timedelta(days=1)
        return get_month_range(last_day_last_month.year, last_day_last_month.month)

    year, month = parse_month(period)
    return get_month_range(year, month)


def parse_month(month: str) -> Tuple[int, int]:
    """
    Parse a "YYYY-MM" string into (year, month).

    Raises:
        ValueError: If the string is not a valid month
    """
    try:
        parsed = datetime.strptime(month, "%Y-%m")
    except ValueError:
        raise ValueError(f"Unknown period: {month}") from None
    return parsed.year, parsed.month


def get_month_range(year: int, month: int) -> Tuple[str, str]:
    """
    Get the date range for a specific month.

    Args:
        year: Year (e.g., 2026)
        month: Month (1-12)

    Returns:
        Tuple of (start_date, end_date) as "YYYY-MM-DD" strings

    Raises:
        ValueError: If month is not in valid range (1-12)
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")

    _, last_day = calendar.monthrange(year, month)

    start = f"{year:04d}-{month:02d}-01"
    end = f"{year:04d}-{month:02d}-{last_day:02d}"

    return start, end


def is_same_month(value: str, month: date) -> bool:
    """True if the "YYYY-MM-DD" string ``value`` falls in ``month``'s month."""
    return value[:7] == f"{month.year:04d}-{month.month:02d}"


def parse_iso_date(value: str) -> date:
    """Parse a "YYYY-MM-DD" (or full ISO datetime) string into a date."""
    return datetime.fromisoformat(value.strip()).date()
