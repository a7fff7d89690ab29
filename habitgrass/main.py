"""
habit-grass: habit streaks and activity heatmaps

Entry point for the terminal report.
"""

from datetime import date

from habitgrass.cli import display_heatmap, display_streak, display_summary, display_week
from habitgrass.config import (
    configure_logging,
    get_lookback_days,
    get_snapshot_path,
    get_week_start,
    validate_config,
)
from habitgrass.engine import HabitEngine
from habitgrass.snapshot import SnapshotError, load_snapshot


def main(today: date | None = None) -> int:
    print("habit-grass - Keep your habits green!")
    print("-" * 50)

    # Validate configuration
    try:
        validate_config()
    except ValueError as e:
        print(f"\nConfiguration Error:\n{e}")
        return 1

    configure_logging()

    try:
        snapshot = load_snapshot(get_snapshot_path())
    except SnapshotError as e:
        print(f"\nError: {e}")
        return 1

    engine = HabitEngine(week_start=get_week_start(), lookback_days=get_lookback_days())
    engine.refresh(snapshot.habits, snapshot.records, today or date.today())

    print()
    display_heatmap(engine.grass_heatmap())
    display_summary(engine.summary(engine.today))

    habits = engine.habits()
    if not habits:
        print("No habits yet.")
        return 0

    display_week(engine.due_today(), title="Due Today:")

    print("Streaks:")
    for habit in habits:
        display_streak(habit, engine.streak(habit.id))
    print()

    return 0


if __name__ == "__main__":
    exit(main())
