"""
Aggregate scheduled and completed habits per day.
"""

from datetime import date

from habitgrass.active_filter import scheduled_on
from habitgrass.completion_index import CompletionIndex, is_completed
from habitgrass.dates import day_range
from habitgrass.models import DailySummary, Habit


def daily_summaries(
    habits: list[Habit],
    index: CompletionIndex,
    start: date,
    days: int,
) -> dict[date, DailySummary]:
    """
    Summarize every day of the window ``[start, start + days)``.

    Args:
        habits: All habits, archived ones included. Each day only counts the
            habits that were live on it, so archiving a habit does not
            rewrite past days.
        index: Completion index from build_index()
        start: First day of the window
        days: Number of days in the window

    Returns:
        Mapping of day -> DailySummary, one entry per day of the window
    """
    return {day: summarize_day(habits, index, day) for day in day_range(start, days)}


def summarize_day(habits: list[Habit], index: CompletionIndex, day: date) -> DailySummary:
    """Build the summary of a single day."""
    scheduled = scheduled_on(habits, day)
    completed = [h for h in scheduled if is_completed(index, h.id, day)]

    return DailySummary(
        day=day,
        scheduled_habits=tuple(scheduled),
        completed_habits=tuple(completed),
    )
