"""
Tests for current-week completion strips.
"""

from datetime import date

from habitgrass.completion_index import build_index
from habitgrass.models import CompletionRecord, Habit, Schedule, Weekday
from habitgrass.week_status import due_today, week_days, week_status, week_statuses

SUNDAY = date(2026, 1, 18)
TODAY = date(2026, 1, 21)  # Wednesday
SATURDAY = date(2026, 1, 24)


def make_habit(habit_id, schedule=None, order_index=0, **kwargs):
    return Habit(
        id=habit_id,
        title=habit_id.title(),
        schedule=schedule or Schedule.daily(),
        created_at=date(2026, 1, 1),
        order_index=order_index,
        **kwargs,
    )


class TestWeekDays:
    """Tests for week_days."""

    def test_sunday_week(self):
        days = week_days(TODAY)
        assert days[0] == SUNDAY
        assert days[-1] == SATURDAY
        assert len(days) == 7

    def test_monday_week(self):
        days = week_days(TODAY, Weekday.MONDAY)
        assert days[0] == date(2026, 1, 19)
        assert days[-1] == date(2026, 1, 25)

    def test_day_is_week_start(self):
        assert week_days(SUNDAY)[0] == SUNDAY


class TestWeekStatus:
    """Tests for single-habit week strips."""

    def test_completions_follow_index(self):
        habit = make_habit("read")
        index = build_index([
            CompletionRecord("read", SUNDAY),
            CompletionRecord("read", TODAY),
        ])

        status = week_status(habit, week_days(TODAY), index)

        assert status.completions == (True, False, False, True, False, False, False)
        assert status.is_completed(TODAY) is True
        assert status.is_completed(SATURDAY) is False

    def test_unscheduled_day_with_record_counts(self):
        habit = make_habit("gym", schedule=Schedule.custom([Weekday.MONDAY]))
        index = build_index([CompletionRecord("gym", TODAY)])

        status = week_status(habit, week_days(TODAY), index)

        assert status.is_completed(TODAY) is True

    def test_last_record_wins(self):
        habit = make_habit("read")
        index = build_index([
            CompletionRecord("read", TODAY),
            CompletionRecord("read", TODAY, is_completed=False),
        ])

        status = week_status(habit, week_days(TODAY), index)

        assert status.is_completed(TODAY) is False

    def test_day_outside_week(self):
        status = week_status(make_habit("read"), week_days(TODAY), build_index([]))
        assert status.is_completed(date(2026, 2, 1)) is False

    def test_to_dict(self):
        index = build_index([CompletionRecord("read", SUNDAY)])
        data = week_status(make_habit("read"), week_days(TODAY), index).to_dict()

        assert data["habit_id"] == "read"
        assert data["days"][0] == {"date": "2026-01-18", "completed": True}
        assert len(data["days"]) == 7


class TestWeekStatuses:
    """Tests for week_statuses."""

    def test_current_habits_in_order(self):
        habits = [
            make_habit("read", order_index=2),
            make_habit("run", order_index=1),
            make_habit("old", is_archived=True, archived_at=date(2026, 1, 10)),
        ]

        statuses = week_statuses(habits, build_index([]), TODAY)

        assert [s.habit.id for s in statuses] == ["run", "read"]
        assert all(s.days[0] == SUNDAY for s in statuses)

    def test_empty(self):
        assert week_statuses([], build_index([]), TODAY) == []


class TestDueToday:
    """Tests for due_today."""

    def test_only_habits_active_today(self):
        habits = [
            make_habit("mon", schedule=Schedule.custom([Weekday.MONDAY])),
            make_habit("wed", schedule=Schedule.custom([Weekday.WEDNESDAY])),
            make_habit("empty", schedule=Schedule.custom([])),
        ]

        due = due_today(habits, build_index([]), TODAY)

        assert [s.habit.id for s in due] == ["wed"]

    def test_weekdays_schedule_not_due_on_weekend(self):
        habits = [make_habit("work", schedule=Schedule.weekdays())]
        assert due_today(habits, build_index([]), SATURDAY) == []

    def test_capped_at_three_by_order(self):
        habits = [make_habit(f"h{i}", order_index=5 - i) for i in range(5)]

        due = due_today(habits, build_index([]), TODAY)

        assert [s.habit.id for s in due] == ["h4", "h3", "h2"]

    def test_no_limit(self):
        habits = [make_habit(f"h{i}") for i in range(5)]
        assert len(due_today(habits, build_index([]), TODAY, limit=None)) == 5

    def test_archived_and_not_yet_created_excluded(self):
        habits = [
            make_habit("old", is_archived=True, archived_at=date(2026, 1, 10)),
            Habit(id="new", schedule=Schedule.daily(), created_at=date(2026, 1, 22)),
            make_habit("read"),
        ]

        due = due_today(habits, build_index([]), TODAY)

        assert [s.habit.id for s in due] == ["read"]

    def test_strip_covers_whole_week(self):
        index = build_index([CompletionRecord("read", date(2026, 1, 19))])

        status = due_today([make_habit("read")], index, TODAY)[0]

        assert status.days == tuple(week_days(TODAY))
        assert status.completions[1] is True
