"""
Read-only habit snapshot loaded from a JSON file.

The snapshot is written by whatever owns the habit data (the mobile app's
export, a sync job, a test fixture). The engine never writes it back.

Format:
    {
        "habits": [
            {"id": "...", "title": "Read", "schedule": {"type": "custom", "days": [2, 4, 6]},
             "created_at": "2025-01-01T08:00:00", "archived_at": null, "is_archived": false}
        ],
        "records": [
            {"habit_id": "...", "date": "2025-01-02", "is_completed": true}
        ]
    }
"""

import json
import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError

from habitgrass.models import CompletionRecord, Habit, Schedule

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Raised when a snapshot file is missing or malformed."""

    pass


class SchedulePayload(BaseModel):
    type: Literal["daily", "weekdays", "custom"]
    days: list[int] = Field(default_factory=list)


class HabitPayload(BaseModel):
    id: str = Field(..., min_length=1)
    title: str = ""
    icon_name: str = ""
    color_hex: str = ""
    schedule: SchedulePayload
    created_at: datetime | date
    archived_at: datetime | date | None = None
    is_archived: bool = False
    order_index: int = 0


class RecordPayload(BaseModel):
    habit_id: str
    day: datetime | date = Field(..., alias="date")
    is_completed: bool = True


class SnapshotPayload(BaseModel):
    habits: list[HabitPayload] = Field(default_factory=list)
    records: list[RecordPayload] = Field(default_factory=list)


@dataclass(frozen=True)
class Snapshot:
    """Habits and completion records at one point in time."""

    habits: tuple[Habit, ...] = ()
    records: tuple[CompletionRecord, ...] = ()


def parse_snapshot(data: dict) -> Snapshot:
    """
    Convert decoded snapshot JSON into engine objects.

    Records keep their order from the input, so a later duplicate for the
    same habit and day wins when the completion index is built.

    Raises:
        SnapshotError: if the data does not match the snapshot format
    """
    try:
        payload = SnapshotPayload.model_validate(data)
        habits = tuple(_to_habit(h) for h in payload.habits)
    except (ValidationError, ValueError) as e:
        raise SnapshotError(f"Invalid snapshot: {e}") from e

    records = tuple(
        CompletionRecord(habit_id=r.habit_id, day=r.day, is_completed=r.is_completed)
        for r in payload.records
    )

    known = {h.id for h in habits}
    orphans = {r.habit_id for r in records if r.habit_id not in known}
    if orphans:
        logger.warning("Snapshot has records for %d unknown habit(s)", len(orphans))

    return Snapshot(habits=habits, records=records)


def load_snapshot(path: str | Path) -> Snapshot:
    """
    Load a snapshot file.

    Args:
        path: Path to the snapshot JSON file

    Raises:
        SnapshotError: if the file is missing, not JSON, or malformed
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise SnapshotError(f"Snapshot file not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise SnapshotError(f"Could not read snapshot {path}: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotError(f"Invalid snapshot: expected a JSON object in {path}")

    snapshot = parse_snapshot(data)
    logger.debug(
        "Loaded %d habits and %d records from %s",
        len(snapshot.habits),
        len(snapshot.records),
        path,
    )
    return snapshot


def snapshot_to_dict(snapshot: Snapshot) -> dict:
    """Serialize a snapshot into the file format read by load_snapshot()."""
    return {
        "habits": [
            {
                "id": h.id,
                "title": h.title,
                "icon_name": h.icon_name,
                "color_hex": h.color_hex,
                "schedule": h.schedule.to_dict(),
                "created_at": h.created_at.isoformat(),
                "archived_at": h.archived_at.isoformat() if h.archived_at else None,
                "is_archived": h.is_archived,
                "order_index": h.order_index,
            }
            for h in snapshot.habits
        ],
        "records": [
            {"habit_id": r.habit_id, "date": r.day.isoformat(), "is_completed": r.is_completed}
            for r in snapshot.records
        ],
    }


def _to_habit(payload: HabitPayload) -> Habit:
    return Habit(
        id=payload.id,
        title=payload.title,
        icon_name=payload.icon_name,
        color_hex=payload.color_hex,
        schedule=Schedule.from_dict(payload.schedule.model_dump()),
        created_at=payload.created_at,
        archived_at=payload.archived_at,
        is_archived=payload.is_archived,
        order_index=payload.order_index,
    )
