"""
Heat level classifier for the habit activity heatmap.

Levels 0 and 4 are absolute (nothing done / everything done). Levels 1-3 are
relative to the partially completed days of the window being rendered, so
thresholds are recomputed for every window and the same day can get a
different level in the yearly view than in the widget view.
"""

import math
from dataclasses import dataclass
from datetime import date

from habitgrass.models import DailySummary

# Thresholds used when a window has no partially completed days
DEFAULT_THRESHOLD = 1


@dataclass(frozen=True)
class Thresholds:
    """Upper bounds (inclusive) of levels 1 and 2."""

    q1: int = DEFAULT_THRESHOLD
    q2: int = DEFAULT_THRESHOLD


def nearest_rank_percentile(percentile: int, sorted_values: list[int]) -> int:
    """
    Nearest-rank percentile of an ascending list.

    Args:
        percentile: Percentile in 0-100
        sorted_values: Values sorted ascending

    Returns:
        The value at rank ceil(n * p / 100) (at least rank 1), or 1 for an
        empty list.
    """
    if not sorted_values:
        return DEFAULT_THRESHOLD

    rank = max(1, math.ceil(len(sorted_values) * percentile / 100))
    return sorted_values[min(rank - 1, len(sorted_values) - 1)]


def partial_counts(summaries: dict[date, DailySummary], today: date) -> list[int]:
    """
    Completed counts of the partially completed, non-future days.

    Days where nothing or everything was completed are left out.
    """
    return sorted(
        summary.completed_count
        for day, summary in summaries.items()
        if day <= today and 0 < summary.completed_count < summary.scheduled_count
    )


def compute_thresholds(summaries: dict[date, DailySummary], today: date) -> Thresholds:
    """Derive level thresholds from the window's partial completions."""
    partials = partial_counts(summaries, today)
    return Thresholds(
        q1=nearest_rank_percentile(25, partials),
        q2=nearest_rank_percentile(50, partials),
    )


def classify_level(
    summary: DailySummary | None, thresholds: Thresholds, is_future: bool = False
) -> int:
    """
    Classify a day into a heat level.

    Returns:
        Level from 0-4:
            0: Future day, nothing scheduled, or nothing completed
            1: Completed count at or below q1
            2: Completed count at or below q2
            3: Partial completion above q2
            4: Every scheduled habit completed
    """
    if is_future or summary is None:
        return 0
    if summary.scheduled_count == 0 or summary.completed_count == 0:
        return 0
    if summary.completed_count == summary.scheduled_count:
        return 4
    if summary.completed_count <= thresholds.q1:
        return 1
    if summary.completed_count <= thresholds.q2:
        return 2
    return 3


def classify_days(summaries: dict[date, DailySummary], today: date) -> dict[date, int]:
    """
    Classify every day of a window.

    Args:
        summaries: Summaries of exactly the days being rendered
        today: Days after today are future and always level 0

    Returns:
        Mapping of day -> level
    """
    thresholds = compute_thresholds(summaries, today)
    return {
        day: classify_level(summary, thresholds, is_future=day > today)
        for day, summary in summaries.items()
    }
