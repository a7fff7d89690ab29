"""
Decide whether a habit's schedule makes it due on a given day.
"""

from datetime import date

from habitgrass.models import Schedule, ScheduleKind, Weekday


def is_active(schedule: Schedule, day: date) -> bool:
    """
    Check whether a schedule is due on a day.

    Args:
        schedule: The habit's schedule
        day: Calendar day to evaluate

    Returns:
        True for every day of a daily schedule, Monday to Friday for a
        weekdays schedule, and the listed weekdays for a custom schedule.
        A custom schedule with no days is never active.
    """
    if schedule.kind is ScheduleKind.DAILY:
        return True
    if schedule.kind is ScheduleKind.WEEKDAYS:
        # weekday(): Monday = 0 ... Sunday = 6, unaffected by week-start settings
        return day.weekday() < 5
    return Weekday.from_date(day) in schedule.days
