"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

PERIODS = ("this-week", "this-month", "this-year", "last-week", "last-month", "last-year")


def _start_of(unit: str, today: date) -> date:
    if unit == "week":
        return today - timedelta(days=today.weekday())
    if unit == "month":
        return today.replace(day=1)
    if unit == "year":
        return today.replace(month=1, day=1)
    raise ValueError(f"Unknown period unit '{unit}'")


def _step(unit: str) -> relativedelta:
    return relativedelta(**{f"{unit}s": 1})


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Accepts absolute dates in any format dateutil understands ("2024-01-15",
    "Jan 15 2024") and a few relative forms: "today", "yesterday",
    "tomorrow", "this/last/next week|month|year" (first day of the period)
    and "last <weekday>".

    Args:
        date_str: Date string
        today: Reference date for relative forms (defaults to today)

    Returns:
        Date object

    Raises:
        ValueError: If the string cannot be parsed
    """
    text = (date_str or "").strip().lower()
    if not text:
        raise ValueError("Empty date string")
    today = today or date.today()

    fixed = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in fixed:
        return fixed[text]

    parts = text.split()
    if len(parts) == 2 and parts[0] in ("this", "last", "next"):
        which, unit = parts
        if unit in WEEKDAYS and which == "last":
            days_ago = (today.weekday() - WEEKDAYS.index(unit)) % 7 or 7
            return today - timedelta(days=days_ago)
        if unit in ("week", "month", "year"):
            start = _start_of(unit, today)
            if which == "last":
                return start - _step(unit)
            if which == "next":
                return start + _step(unit)
            return start

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get (start, end) dates for a named period.

    "this-*" periods end today; "last-*" periods cover the whole previous
    week (Monday to Sunday), month or year.

    Raises:
        ValueError: If the period is not one of PERIODS
    """
    period = (period or "").strip().lower()
    today = today or date.today()
    if period not in PERIODS:
        raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")

    which, unit = period.split("-")
    start = _start_of(unit, today)
    if which == "this":
        return start, today
    return start - _step(unit), start - timedelta(days=1)
