"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def _period_start(today: date, prefix: str, period: str) -> date | None:
    """Return the first day of a named period relative to today."""
    if prefix == "last":
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        if period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        if period == "week":
            # Monday of last week
            return today - timedelta(days=today.weekday() + 7)
        if period in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7
            return today - timedelta(days=days_ago or 7)
    elif prefix == "this":
        if period == "month":
            return today.replace(day=1)
        if period == "year":
            return today.replace(month=1, day=1)
        if period == "week":
            return today - timedelta(days=today.weekday())
    elif prefix == "next":
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        if period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)
        if period == "week":
            return today + timedelta(days=(7 - today.weekday()))
    return None


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - ISO 8601 dates: "2024-01-15" (the stored form)
    - Other absolute dates: "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if not date_str:
        raise ValueError("Empty date string")
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    prefix, _, period = date_str.partition(" ")
    if period:
        start = _period_start(today, prefix, period)
        if start is not None:
            return start

    # ISO first so "2024-02-03" never goes through dateutil's guessing
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
