"""
Calendar-day helpers shared by the engine.

Every day value handled by the engine is a plain ``datetime.date``; instants
are reduced to their calendar day and time of day is discarded.
"""

from datetime import date, datetime, timedelta


def to_day(value: date | datetime) -> date:
    """
    Normalize a date or datetime to a calendar day.

    Args:
        value: A ``date`` or ``datetime``. Aware datetimes keep the calendar
            day of their own offset.

    Returns:
        The calendar day as a ``date``.
    """
    if isinstance(value, datetime):
        return value.date()
    return value


def add_days(day: date, days: int) -> date:
    """
    Shift a day by a number of days.

    Falls back to the unshifted day when the result would leave the
    representable date range.
    """
    try:
        return day + timedelta(days=days)
    except OverflowError:
        return day


def day_range(start: date, count: int) -> list[date]:
    """Return ``count`` consecutive days beginning at ``start``."""
    days = []
    for i in range(max(count, 0)):
        current = add_days(start, i)
        # Stop at the edge of the calendar instead of repeating the last day
        if i and current <= days[-1]:
            break
        days.append(current)
    return days
