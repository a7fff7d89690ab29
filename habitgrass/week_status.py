"""
Current-week completion strips.

Used by the habit list (one strip per current habit) and by the compact
"due today" view, which keeps only habits scheduled today.
"""

from datetime import date

from habitgrass.active_filter import current_habits, is_live
from habitgrass.completion_index import CompletionIndex, is_completed
from habitgrass.dates import day_range
from habitgrass.heatmap_builder import start_of_week
from habitgrass.models import Habit, WeekStatus, Weekday
from habitgrass.schedule import is_active

# Habits shown by the compact view
DUE_TODAY_LIMIT = 3


def week_days(day: date, week_start: Weekday = Weekday.SUNDAY) -> list[date]:
    """The 7 days of the week containing ``day``."""
    return day_range(start_of_week(day, week_start), 7)


def week_status(habit: Habit, days: list[date], index: CompletionIndex) -> WeekStatus:
    return WeekStatus(
        habit=habit,
        days=tuple(days),
        completions=tuple(is_completed(index, habit.id, d) for d in days),
    )


def week_statuses(
    habits: list[Habit],
    index: CompletionIndex,
    day: date,
    week_start: Weekday = Weekday.SUNDAY,
) -> list[WeekStatus]:
    """
    Week strips of every current habit for the week containing ``day``.

    Completion is read straight from the index, so a day outside the
    schedule still shows as done when a completed record exists.
    """
    days = week_days(day, week_start)
    return [week_status(habit, days, index) for habit in current_habits(habits)]


def due_today(
    habits: list[Habit],
    index: CompletionIndex,
    today: date,
    week_start: Weekday = Weekday.SUNDAY,
    limit: int | None = DUE_TODAY_LIMIT,
) -> list[WeekStatus]:
    """
    Week strips of the current habits scheduled today.

    Args:
        habits: All habits; archived ones are dropped
        index: Completion index
        today: The day that decides which habits are due
        week_start: First weekday of the strip
        limit: Maximum number of habits, in ``order_index`` order; None for all
    """
    due = [
        habit
        for habit in current_habits(habits)
        if is_live(habit, today) and is_active(habit.schedule, today)
    ]
    if limit is not None:
        due = due[:max(limit, 0)]
    days = week_days(today, week_start)
    return [week_status(habit, days, index) for habit in due]
