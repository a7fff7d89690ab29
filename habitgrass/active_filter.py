"""
Decide which habits exist on a given day.
"""

from datetime import date

from habitgrass.models import Habit
from habitgrass.schedule import is_active


def is_live(habit: Habit, day: date) -> bool:
    """
    Check whether a habit exists on a day.

    A habit is live from its creation day up to, but not including, its
    archive day. A habit without ``archived_at`` is treated as never
    archived. The ``is_archived`` flag is not consulted, so archived habits
    still count on the days before they were archived.
    """
    if day < habit.created_at:
        return False
    if habit.archived_at is not None:
        return day < habit.archived_at
    return True


def scheduled_on(habits: list[Habit], day: date) -> list[Habit]:
    """Habits that are live and due on the day, in input order."""
    return [h for h in habits if is_live(h, day) and is_active(h.schedule, day)]


def current_habits(habits: list[Habit]) -> list[Habit]:
    """
    Habits for "active habit list" views: archived ones are dropped outright.

    Sorted by ``order_index``; ties keep input order.
    """
    return sorted((h for h in habits if not h.is_archived), key=lambda h: h.order_index)
