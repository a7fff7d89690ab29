"""
Tests for CLI display functions.
"""

import io
from contextlib import redirect_stdout
from datetime import date, timedelta

from habitgrass.cli import (
    display_heatmap,
    display_mini_heatmap,
    display_streak,
    display_summary,
    display_week,
    get_milestone_message,
    get_streak_badge,
)
from habitgrass.models import (
    CellState,
    DailySummary,
    Habit,
    HeatCell,
    Schedule,
    StreakSnapshot,
    WeekStatus,
)

SUNDAY = date(2026, 1, 4)
HABIT = Habit(id="read", title="Read", schedule=Schedule.daily(), created_at=SUNDAY)


def capture(func, *args) -> str:
    output = io.StringIO()
    with redirect_stdout(output):
        func(*args)
    return output.getvalue()


class TestGetMilestoneMessage:
    """Tests for milestone messages."""

    def test_three_weeks(self):
        assert get_milestone_message(21) == "Three weeks!"

    def test_one_month(self):
        assert get_milestone_message(30) == "One month!"
        assert get_milestone_message(49) == "One month!"

    def test_hundred_days(self):
        assert get_milestone_message(100) == "100 days and counting!"

    def test_one_year(self):
        assert get_milestone_message(365) == "One year!"
        assert get_milestone_message(366) == "Beyond a year!"

    def test_no_message_for_short_streaks(self):
        assert get_milestone_message(0) is None
        assert get_milestone_message(5) is None
        assert get_milestone_message(14) is None

    def test_broken_streak_shows_best(self):
        assert get_milestone_message(0, best=12) == "Best: 12 days"
        assert get_milestone_message(0, best=1) == "Best: 1 day"


class TestGetStreakBadge:
    def test_emoji_tiers(self):
        assert get_streak_badge(3)[0] == "💪"
        assert get_streak_badge(7)[0] == "✨"
        assert get_streak_badge(14)[0] == "🔥"
        assert get_streak_badge(0) == ("", None)


class TestDisplayStreak:
    """Tests for streak display."""

    def test_single_day(self):
        result = capture(display_streak, HABIT, StreakSnapshot("read", SUNDAY, 1, 4))
        assert "Read: 1 day (best 4)" in result

    def test_milestone_included(self):
        result = capture(display_streak, HABIT, StreakSnapshot("read", SUNDAY, 30, 30))
        assert "30 days" in result
        assert "One month!" in result

    def test_falls_back_to_id(self):
        habit = Habit(id="h-42", schedule=Schedule.daily(), created_at=SUNDAY)
        result = capture(display_streak, habit, StreakSnapshot("h-42", SUNDAY, 0, 0))
        assert "h-42: 0 days" in result


class TestDisplaySummary:
    """Tests for day summary display."""

    def test_nothing_scheduled(self):
        result = capture(display_summary, DailySummary(SUNDAY))
        assert "No habits scheduled" in result

    def test_partial_day(self):
        other = Habit(id="run", title="Run", schedule=Schedule.daily(), created_at=SUNDAY)
        summary = DailySummary(SUNDAY, (HABIT, other), (HABIT,))

        result = capture(display_summary, summary)

        assert "1 / 2 habits completed (50%)" in result
        assert "[x] Read" in result
        assert "[ ] Run" in result


class TestDisplayHeatmap:
    """Tests for heatmap display."""

    def test_rows_and_today_marker(self):
        grid = [
            [
                HeatCell(
                    day=SUNDAY + timedelta(days=w * 7 + d),
                    level=(w + d) % 5,
                    is_today=(w, d) == (1, 3),
                )
                for d in range(7)
            ]
            for w in range(2)
        ]

        lines = capture(display_heatmap, grid).splitlines()

        assert lines[0] == "Habit Activity:"
        assert lines[1].startswith("  Sun")
        assert lines[7].startswith("  Sat")
        assert "[" in lines[4]  # Wednesday row holds today
        assert "Less" in lines[8]

    def test_empty_grid(self):
        assert "No activity" in capture(display_heatmap, [])


class TestDisplayMiniHeatmap:
    def test_one_line_per_week(self):
        states = [CellState.COMPLETED, CellState.PENDING, CellState.INACTIVE] * 5
        cells = [
            HeatCell(day=SUNDAY + timedelta(days=i), state=states[i]) for i in range(14)
        ]

        lines = [line for line in capture(display_mini_heatmap, cells).splitlines() if line]

        assert len(lines) == 2
        assert lines[0].startswith("  2026-01-04 ■· ")


class TestDisplayWeek:
    """Tests for week strip display."""

    def test_rows_and_marks(self):
        days = tuple(SUNDAY + timedelta(days=i) for i in range(7))
        other = Habit(id="run", title="Run", schedule=Schedule.daily(), created_at=SUNDAY)
        statuses = [
            WeekStatus(HABIT, days, (True, False, False, False, False, False, True)),
            WeekStatus(other, days, (False,) * 7),
        ]

        lines = capture(display_week, statuses, "Due Today:").splitlines()

        assert lines[0] == "Due Today:"
        assert lines[1].split() == ["Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"]
        assert lines[2].split() == ["Read", "✓", "·", "·", "·", "·", "·", "✓"]
        assert lines[3].split() == ["Run"] + ["·"] * 7

    def test_empty_prints_nothing(self):
        assert capture(display_week, []) == ""
