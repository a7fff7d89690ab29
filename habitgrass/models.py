"""
Data model for the habit engine.

Habits and completion records are read from a snapshot; summaries, heat
cells and streak snapshots are derived on every recompute and never mutated.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum, IntEnum

from habitgrass.dates import to_day


class Weekday(IntEnum):
    """Weekday numbering used by custom schedules (Sunday = 1)."""

    SUNDAY = 1
    MONDAY = 2
    TUESDAY = 3
    WEDNESDAY = 4
    THURSDAY = 5
    FRIDAY = 6
    SATURDAY = 7

    @classmethod
    def from_date(cls, day: date) -> "Weekday":
        # isoweekday(): Monday = 1 ... Sunday = 7
        return cls(day.isoweekday() % 7 + 1)


class ScheduleKind(str, Enum):
    DAILY = "daily"
    WEEKDAYS = "weekdays"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Schedule:
    """
    Which calendar days a habit is due.

    A tagged union: ``kind`` selects the variant and ``days`` carries the
    weekday set of the ``custom`` variant (ignored for the others).
    """

    kind: ScheduleKind
    days: frozenset[Weekday] = frozenset()

    @classmethod
    def daily(cls) -> "Schedule":
        return cls(ScheduleKind.DAILY)

    @classmethod
    def weekdays(cls) -> "Schedule":
        return cls(ScheduleKind.WEEKDAYS)

    @classmethod
    def custom(cls, days) -> "Schedule":
        return cls(ScheduleKind.CUSTOM, frozenset(Weekday(d) for d in days))

    @property
    def id(self) -> str:
        if self.kind is ScheduleKind.CUSTOM:
            return "custom-" + "-".join(str(int(d)) for d in sorted(self.days))
        return self.kind.value

    def to_dict(self) -> dict:
        data = {"type": self.kind.value}
        if self.kind is ScheduleKind.CUSTOM:
            data["days"] = sorted(int(d) for d in self.days)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Schedule":
        """
        Build a schedule from its serialized form.

        Args:
            data: ``{"type": "daily" | "weekdays" | "custom", "days": [1-7]}``

        Raises:
            ValueError: on an unknown type or weekday number
        """
        kind = ScheduleKind(data.get("type"))
        if kind is ScheduleKind.CUSTOM:
            return cls.custom(data.get("days") or [])
        return cls(kind)


@dataclass(frozen=True)
class Habit:
    """A habit as read from the snapshot. Dates are stored day-granular."""

    id: str
    schedule: Schedule
    created_at: date
    archived_at: date | None = None
    is_archived: bool = False
    title: str = ""
    icon_name: str = ""
    color_hex: str = ""
    order_index: int = 0

    def __post_init__(self):
        object.__setattr__(self, "created_at", to_day(self.created_at))
        if self.archived_at is not None:
            object.__setattr__(self, "archived_at", to_day(self.archived_at))


@dataclass(frozen=True)
class CompletionRecord:
    """Whether a habit was completed on a given day."""

    habit_id: str
    day: date
    is_completed: bool = True

    def __post_init__(self):
        object.__setattr__(self, "day", to_day(self.day))


@dataclass(frozen=True)
class DailySummary:
    """Habits scheduled on a day and the subset that was completed."""

    day: date
    scheduled_habits: tuple[Habit, ...] = ()
    completed_habits: tuple[Habit, ...] = ()

    @property
    def scheduled_count(self) -> int:
        return len(self.scheduled_habits)

    @property
    def completed_count(self) -> int:
        return len(self.completed_habits)

    @property
    def completion_rate(self) -> float:
        """Completed / scheduled, 0.0 when nothing is scheduled."""
        if not self.scheduled_habits:
            return 0.0
        return self.completed_count / self.scheduled_count

    def is_completed(self, habit_id: str) -> bool:
        return any(h.id == habit_id for h in self.completed_habits)


class CellState(str, Enum):
    INACTIVE = "inactive"
    PENDING = "pending"
    COMPLETED = "completed"


@dataclass(frozen=True)
class HeatCell:
    """
    One square of a heatmap grid.

    Aggregate grids carry a ``level`` in 0..4; per-habit grids carry a
    ``state`` instead and leave ``level`` at 0.
    """

    day: date
    is_today: bool = False
    level: int = 0
    state: CellState | None = None

    def to_dict(self) -> dict:
        data = {
            "date": self.day.isoformat(),
            "is_today": self.is_today,
            "level": self.level,
        }
        if self.state is not None:
            data["state"] = self.state.value
        return data


@dataclass(frozen=True)
class StreakSnapshot:
    """Streak counts of one habit, valid only for ``as_of``."""

    habit_id: str
    as_of: date
    current: int = 0
    longest: int = 0


@dataclass(frozen=True)
class WeekStatus:
    """One habit's completion for each day of a week, first weekday first."""

    habit: Habit
    days: tuple[date, ...] = ()
    completions: tuple[bool, ...] = ()

    def is_completed(self, day: date) -> bool:
        for d, done in zip(self.days, self.completions):
            if d == day:
                return done
        return False

    def to_dict(self) -> dict:
        return {
            "habit_id": self.habit.id,
            "days": [
                {"date": d.isoformat(), "completed": done}
                for d, done in zip(self.days, self.completions)
            ],
        }
