"""
Calculate habit completion streaks.

Days on which a habit is not scheduled are skipped: they neither break nor
extend a streak.
"""

import logging
from datetime import date

from habitgrass.completion_index import CompletionIndex, is_completed
from habitgrass.dates import add_days
from habitgrass.models import Habit, StreakSnapshot
from habitgrass.schedule import is_active

logger = logging.getLogger(__name__)

# Upper bound on the backward walk, so corrupt data cannot loop forever
MAX_STREAK_SCAN_DAYS = 3650

DEFAULT_LOOKBACK_DAYS = 365


def calculate_streak(
    habit: Habit,
    as_of: date,
    index: CompletionIndex,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> StreakSnapshot:
    """
    Calculate streak information for one habit.

    Args:
        habit: The habit to evaluate
        as_of: Day the streak is measured at (usually today)
        index: Completion index from build_index()
        lookback_days: Window of the longest-streak scan

    Returns:
        StreakSnapshot with current and longest streak, valid for ``as_of`` only
    """
    current = current_streak(habit, as_of, index)
    longest = _longest_run(habit, as_of, index, lookback_days)

    return StreakSnapshot(
        habit_id=habit.id,
        as_of=as_of,
        current=current,
        # Longest streak should be at least as long as current streak
        longest=max(longest, current),
    )


def current_streak(habit: Habit, as_of: date, index: CompletionIndex) -> int:
    """
    Count consecutive completed scheduled days ending at ``as_of``.

    Walks backward from ``as_of``; the first scheduled day without a
    completed record ends the streak. An incomplete ``as_of`` therefore
    yields 0.
    """
    streak = 0
    cursor = as_of

    for _ in range(MAX_STREAK_SCAN_DAYS):
        if is_active(habit.schedule, cursor):
            if not is_completed(index, habit.id, cursor):
                return streak
            streak += 1

        previous = add_days(cursor, -1)
        if previous == cursor:
            # Reached the start of the calendar
            return streak
        cursor = previous

    logger.debug(
        "Streak scan for habit %s stopped after %d days", habit.id, MAX_STREAK_SCAN_DAYS
    )
    return streak


def longest_streak(
    habit: Habit,
    as_of: date,
    index: CompletionIndex,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> int:
    """
    Find the longest streak within ``lookback_days`` before ``as_of``.

    Never less than the current streak, even when the current streak
    started before the lookback window.
    """
    return max(
        _longest_run(habit, as_of, index, lookback_days),
        current_streak(habit, as_of, index),
    )


def _longest_run(
    habit: Habit, as_of: date, index: CompletionIndex, lookback_days: int
) -> int:
    """
    Forward scan of ``[as_of - lookback_days, as_of]``.

    Unscheduled days leave the running count untouched, completed scheduled
    days extend it and missed scheduled days reset it.
    """
    cursor = add_days(as_of, -max(lookback_days, 0))
    running = 0
    best = 0

    while cursor <= as_of:
        if is_active(habit.schedule, cursor):
            if is_completed(index, habit.id, cursor):
                running += 1
                best = max(best, running)
            else:
                running = 0

        following = add_days(cursor, 1)
        if following == cursor:
            break
        cursor = following

    return best


def total_completions(habit: Habit, index: CompletionIndex) -> int:
    """Number of days with a completed record for the habit."""
    return sum(1 for record in index.get(habit.id, {}).values() if record.is_completed)
