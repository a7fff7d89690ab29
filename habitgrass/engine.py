"""
Engine facade used by the terminal report and the web app.

All computation is synchronous and side-effect free. ``HabitEngine`` keeps the
last snapshot it was refreshed with as one immutable ``EngineState``; a
refresh builds a new state and swaps the reference instead of patching it.
"""

import logging
from dataclasses import dataclass, field
from datetime import date

from habitgrass.active_filter import current_habits
from habitgrass.completion_index import CompletionIndex, build_index
from habitgrass.heatmap_builder import (
    GRASS_WEEKS,
    MINI_WEEKS,
    YEAR_WEEKS,
    build_heat_grid,
    build_mini_grid,
    grid_start,
    window_start,
)
from habitgrass.models import (
    CompletionRecord,
    DailySummary,
    Habit,
    HeatCell,
    StreakSnapshot,
    WeekStatus,
    Weekday,
)
from habitgrass.streak_calculator import DEFAULT_LOOKBACK_DAYS, calculate_streak
from habitgrass.summary_aggregator import daily_summaries, summarize_day
from habitgrass.week_status import DUE_TODAY_LIMIT, due_today, week_statuses

logger = logging.getLogger(__name__)


class HabitNotFoundError(Exception):
    """Raised when a habit id is not part of the current snapshot."""

    pass


class EngineNotReadyError(Exception):
    """Raised when the engine is queried before the first refresh."""

    pass


def daily_summaries_for(
    habits: list[Habit], records: list[CompletionRecord], start: date, days: int
) -> dict[date, DailySummary]:
    """Summaries of ``[start, start + days)`` straight from habits and records."""
    return daily_summaries(habits, build_index(records), start, days)


def heat_grid(
    start_day: date,
    week_count: int,
    habits: list[Habit],
    records: list[CompletionRecord],
    today: date,
    week_start: Weekday = Weekday.SUNDAY,
) -> list[list[HeatCell]]:
    """Aggregate heatmap of all habits with window-local heat levels."""
    first_day = grid_start(start_day, week_start)
    summaries = daily_summaries(habits, build_index(records), first_day, week_count * 7)
    return build_heat_grid(first_day, week_count, summaries, today, week_start)


def mini_heat_grid(
    habit: Habit,
    start_day: date,
    week_count: int,
    records: list[CompletionRecord],
    today: date,
    week_start: Weekday = Weekday.SUNDAY,
) -> list[HeatCell]:
    """Single-habit heatmap with inactive / pending / completed cells."""
    return build_mini_grid(habit, start_day, week_count, build_index(records), today, week_start)


@dataclass(frozen=True)
class EngineState:
    """One refreshed snapshot. The streak cache lives and dies with it."""

    habits: tuple[Habit, ...]
    index: CompletionIndex
    today: date
    habits_by_id: dict[str, Habit] = field(default_factory=dict)
    # Streaks computed from this state, keyed by (habit_id, as_of)
    streaks: dict[tuple[str, date], StreakSnapshot] = field(default_factory=dict)


class HabitEngine:
    """Habit computations over the most recently refreshed snapshot."""

    def __init__(
        self,
        week_start: Weekday = Weekday.SUNDAY,
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
    ):
        """
        Initialize the engine.

        Args:
            week_start: First weekday of heatmap columns
            lookback_days: Window of the longest-streak scan
        """
        self.week_start = week_start
        self.lookback_days = lookback_days
        self._state: EngineState | None = None

    def refresh(
        self, habits: list[Habit], records: list[CompletionRecord], today: date
    ) -> None:
        """
        Rebuild derived state from a new snapshot.

        Args:
            habits: All habits, archived ones included
            records: Completion records in insertion order
            today: Current day, injected instead of read from the clock
        """
        habits = tuple(habits)
        state = EngineState(
            habits=habits,
            index=build_index(list(records)),
            today=today,
            habits_by_id={h.id: h for h in habits},
        )
        self._state = state
        logger.debug("Engine refreshed with %d habits for %s", len(habits), today)

    @property
    def state(self) -> EngineState:
        if self._state is None:
            raise EngineNotReadyError("Engine has not been refreshed with a snapshot")
        return self._state

    @property
    def today(self) -> date:
        return self.state.today

    def habits(self, include_archived: bool = False) -> list[Habit]:
        """Habits of the snapshot; archived ones only when asked for."""
        if include_archived:
            return list(self.state.habits)
        return current_habits(list(self.state.habits))

    def habit(self, habit_id: str) -> Habit:
        habit = self.state.habits_by_id.get(habit_id)
        if habit is None:
            raise HabitNotFoundError(f"Habit not found: {habit_id}")
        return habit

    def streak(self, habit_id: str, as_of: date | None = None) -> StreakSnapshot:
        """Current and longest streak, cached per habit and day."""
        state = self.state
        habit = self.habit(habit_id)
        as_of = as_of or state.today

        key = (habit_id, as_of)
        snapshot = state.streaks.get(key)
        if snapshot is None:
            snapshot = calculate_streak(habit, as_of, state.index, self.lookback_days)
            state.streaks[key] = snapshot
        return snapshot

    def current_streak(self, habit_id: str, as_of: date | None = None) -> int:
        return self.streak(habit_id, as_of).current

    def longest_streak(self, habit_id: str, as_of: date | None = None) -> int:
        return self.streak(habit_id, as_of).longest

    def summaries(self, start: date, days: int) -> dict[date, DailySummary]:
        state = self.state
        return daily_summaries(list(state.habits), state.index, start, days)

    def summary(self, day: date) -> DailySummary:
        state = self.state
        return summarize_day(list(state.habits), state.index, day)

    def heatmap(self, week_count: int) -> list[list[HeatCell]]:
        """Aggregate grid of ``week_count`` weeks ending with the current week."""
        state = self.state
        start = window_start(state.today, week_count, self.week_start)
        summaries = daily_summaries(list(state.habits), state.index, start, week_count * 7)
        return build_heat_grid(start, week_count, summaries, state.today, self.week_start)

    def year_heatmap(self) -> list[list[HeatCell]]:
        return self.heatmap(YEAR_WEEKS)

    def grass_heatmap(self) -> list[list[HeatCell]]:
        return self.heatmap(GRASS_WEEKS)

    def mini_heatmap(self, habit_id: str, week_count: int = MINI_WEEKS) -> list[HeatCell]:
        state = self.state
        habit = self.habit(habit_id)
        start = window_start(state.today, week_count, self.week_start)
        return build_mini_grid(habit, start, week_count, state.index, state.today, self.week_start)

    def week_statuses(self, day: date | None = None) -> list[WeekStatus]:
        """Completion strips of every current habit for the week containing ``day``."""
        state = self.state
        return week_statuses(list(state.habits), state.index, day or state.today, self.week_start)

    def due_today(self, limit: int | None = DUE_TODAY_LIMIT) -> list[WeekStatus]:
        """Current habits scheduled today, with this week's completion strip."""
        state = self.state
        return due_today(list(state.habits), state.index, state.today, self.week_start, limit)
