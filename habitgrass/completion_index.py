"""
In-memory lookup of completion records by habit and day.
"""

from datetime import date

from habitgrass.models import CompletionRecord

CompletionIndex = dict[str, dict[date, CompletionRecord]]


def build_index(records: list[CompletionRecord]) -> CompletionIndex:
    """
    Group completion records by habit id, then by day.

    Args:
        records: Completion records in a meaningful order (e.g. insertion
            order). When two records share a habit and day, the later one
            wins.

    Returns:
        Mapping of habit_id -> {day -> record}
    """
    index: CompletionIndex = {}
    for record in records:
        index.setdefault(record.habit_id, {})[record.day] = record
    return index


def record_for(index: CompletionIndex, habit_id: str, day: date) -> CompletionRecord | None:
    """Return the record of a habit on a day, or None."""
    return index.get(habit_id, {}).get(day)


def is_completed(index: CompletionIndex, habit_id: str, day: date) -> bool:
    """True only if a record exists for the day and marks it completed."""
    record = record_for(index, habit_id, day)
    return record is not None and record.is_completed
