"""
CLI display functions for habit-grass.
"""

from habitgrass.models import CellState, DailySummary, Habit, HeatCell, StreakSnapshot, WeekStatus

# One character per heat level 0-4
LEVEL_CHARS = [".", "░", "▒", "▓", "█"]

STATE_CHARS = {
    CellState.INACTIVE: " ",
    CellState.PENDING: "·",
    CellState.COMPLETED: "■",
}

DAY_ABBREVS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def get_streak_badge(current: int, best: int = 0) -> tuple[str, str | None]:
    """
    Get the badge emoji and milestone message for a streak.

    Args:
        current: Current streak in days
        best: Longest streak, shown when the current streak is broken

    Returns:
        (emoji, message) where either may be empty / None
    """
    if current > 365:
        return "🌟", "Beyond a year!"
    if current == 365:
        return "🌟", "One year!"
    if current >= 200:
        return "🎖️", "Legendary!"
    if current >= 100:
        return "👑", "100 days and counting!"
    if current >= 50:
        return "🏆", "Amazing!"
    if current >= 30:
        return "🔥", "One month!"
    if current >= 21:
        return "🔥", "Three weeks!"
    if current >= 14:
        return "🔥", None
    if current >= 7:
        return "✨", None
    if current >= 3:
        return "💪", None
    if current == 0 and best > 0:
        return "📈", f"Best: {best} day{'s' if best != 1 else ''}"
    return "", None


def get_milestone_message(current: int, best: int = 0) -> str | None:
    """Milestone message for a streak, or None if there is none."""
    return get_streak_badge(current, best)[1]


def display_streak(habit: Habit, streak: StreakSnapshot) -> None:
    """
    Display one habit's streak to the console.

    Args:
        habit: The habit (title is shown, falling back to the id)
        streak: StreakSnapshot from calculate_streak()
    """
    name = habit.title or habit.id
    emoji, message = get_streak_badge(streak.current, streak.longest)

    day_word = "day" if streak.current == 1 else "days"
    status = f"{streak.current} {day_word} (best {streak.longest})"
    if message:
        status = f"{status} - {message}"

    prefix = f"{emoji} " if emoji else "   "
    print(f"{prefix}{name}: {status}")


def display_summary(summary: DailySummary) -> None:
    """Display completed / scheduled habits of a single day."""
    print(f"📅 {summary.day.isoformat()}")

    if summary.scheduled_count == 0:
        print("   No habits scheduled for this day.")
        print()
        return

    percent = int(summary.completion_rate * 100)
    print(
        f"   {summary.completed_count} / {summary.scheduled_count} habits completed ({percent}%)"
    )
    for habit in summary.scheduled_habits:
        mark = "[x]" if summary.is_completed(habit.id) else "[ ]"
        print(f"   {mark} {habit.title or habit.id}")
    print()


def display_heatmap(grid: list[list[HeatCell]]) -> None:
    """
    Display an aggregate heatmap as 7 weekday rows.

    Args:
        grid: Columns of 7 cells from build_heat_grid(); today is bracketed
    """
    if not grid:
        print("No activity to show.")
        print()
        return

    print("Habit Activity:")
    for row in range(7):
        first_day = grid[0][row].day
        # isoweekday(): Monday = 1 ... Sunday = 7
        label = DAY_ABBREVS[first_day.isoweekday() % 7]
        line = ""
        for week in grid:
            cell = week[row]
            char = LEVEL_CHARS[cell.level]
            line += f"[{char}]" if cell.is_today else f" {char} "
        print(f"  {label} {line.rstrip()}")

    legend = " ".join(LEVEL_CHARS)
    print(f"  Less {legend} More")
    print()


def display_mini_heatmap(cells: list[HeatCell]) -> None:
    """Display a single-habit heatmap as one line per week."""
    for start in range(0, len(cells), 7):
        week = cells[start:start + 7]
        row = "".join(STATE_CHARS[cell.state or CellState.INACTIVE] for cell in week)
        print(f"  {week[0].day.isoformat()} {row}")
    print()


def display_week(statuses: list[WeekStatus], title: str = "This Week:") -> None:
    """
    Display one row per habit with a mark for each day of the week.

    Args:
        statuses: Week strips sharing the same 7 days
        title: Heading printed above the rows
    """
    if not statuses:
        return

    days = statuses[0].days
    width = max(len(s.habit.title or s.habit.id) for s in statuses)
    header = " ".join(DAY_ABBREVS[d.isoweekday() % 7][:2] for d in days)

    print(title)
    print(f"  {'':<{width}}  {header}")
    for status in statuses:
        name = status.habit.title or status.habit.id
        marks = "  ".join("✓" if done else "·" for done in status.completions)
        print(f"  {name:<{width}}  {marks}")
    print()
