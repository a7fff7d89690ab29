"""
Assemble heatmap grids for display.

Grids are column-major: each column is one week of 7 days starting on the
configured first weekday, oldest column first.
"""

from datetime import date

from habitgrass.active_filter import is_live
from habitgrass.completion_index import CompletionIndex, is_completed
from habitgrass.dates import add_days, day_range
from habitgrass.heat_classifier import classify_days
from habitgrass.models import CellState, DailySummary, Habit, HeatCell, Weekday
from habitgrass.schedule import is_active

# Weeks shown by each view
YEAR_WEEKS = 53
GRASS_WEEKS = 14
MINI_WEEKS = 10


def start_of_week(day: date, week_start: Weekday = Weekday.SUNDAY) -> date:
    """Return the ``week_start`` weekday on or before ``day``."""
    offset = (Weekday.from_date(day) - week_start) % 7
    return add_days(day, -offset)


def grid_start(start_day: date, week_start: Weekday = Weekday.SUNDAY) -> date:
    """First day of the grid's first column."""
    return start_of_week(start_day, week_start)


def window_start(
    today: date, week_count: int, week_start: Weekday = Weekday.SUNDAY
) -> date:
    """Start day of a ``week_count`` grid whose last column contains today."""
    return add_days(start_of_week(today, week_start), -7 * (max(week_count, 1) - 1))


def build_heat_grid(
    start_day: date,
    week_count: int,
    summaries: dict[date, DailySummary],
    today: date,
    week_start: Weekday = Weekday.SUNDAY,
) -> list[list[HeatCell]]:
    """
    Build an aggregate heatmap with levels 0-4.

    Args:
        start_day: Any day of the first column
        week_count: Number of columns
        summaries: Daily summaries covering at least the grid's days;
            missing days count as nothing scheduled
        today: Current day, for future days and highlighting
        week_start: First weekday of each column

    Returns:
        ``week_count`` lists of 7 cells each
    """
    days = day_range(grid_start(start_day, week_start), week_count * 7)

    # Thresholds come from the grid's own days only
    window = {day: summaries.get(day) or DailySummary(day=day) for day in days}
    levels = classify_days(window, today)

    cells = [HeatCell(day=day, is_today=day == today, level=levels[day]) for day in days]
    return chunk_weeks(cells)


def build_mini_grid(
    habit: Habit,
    start_day: date,
    week_count: int,
    index: CompletionIndex,
    today: date,
    week_start: Weekday = Weekday.SUNDAY,
) -> list[HeatCell]:
    """
    Build a single-habit heatmap with inactive / pending / completed states.

    Args:
        habit: The habit to render
        start_day: Any day of the first column
        week_count: Number of columns
        index: Completion index from build_index()
        today: Current day, for future days and highlighting
        week_start: First weekday of each column

    Returns:
        Flat list of ``week_count * 7`` cells in column-major order
    """
    cells = []
    for day in day_range(grid_start(start_day, week_start), week_count * 7):
        scheduled = is_live(habit, day) and is_active(habit.schedule, day)

        if not scheduled or day > today:
            state = CellState.INACTIVE
        elif is_completed(index, habit.id, day):
            state = CellState.COMPLETED
        else:
            state = CellState.PENDING

        cells.append(HeatCell(day=day, is_today=day == today, state=state))

    return cells


def chunk_weeks(cells: list[HeatCell]) -> list[list[HeatCell]]:
    """Split cells into columns of 7, dropping a trailing partial week."""
    return [cells[i:i + 7] for i in range(0, len(cells) - 6, 7)]
