"""
FastAPI web application for habit-grass.

Provides REST API endpoints for streaks, daily summaries and heatmaps.
"""

import threading
from datetime import date
from enum import Enum
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from habitgrass.cli import LEVEL_CHARS, get_streak_badge
from habitgrass.config import (
    get_lookback_days,
    get_snapshot_path,
    get_week_start,
    validate_config,
)
from habitgrass.engine import HabitEngine, HabitNotFoundError
from habitgrass.heatmap_builder import GRASS_WEEKS, MINI_WEEKS, YEAR_WEEKS
from habitgrass.models import DailySummary, Habit, HeatCell
from habitgrass.week_status import DUE_TODAY_LIMIT
from habitgrass.snapshot import SnapshotError, load_snapshot

app = FastAPI(
    title="habit-grass",
    description="Habit streaks and activity heatmaps",
    version="0.1.0",
)

templates = Jinja2Templates(directory=Path(__file__).parent / "templates")

MAX_SUMMARY_DAYS = 371

_engine: HabitEngine | None = None
# Sync endpoints run in a threadpool; one thread loads the snapshot at a time
_engine_lock = threading.Lock()


class HeatmapView(str, Enum):
    YEAR = "year"
    GRASS = "grass"


def _today() -> date:
    return date.today()


def _load_engine() -> HabitEngine:
    """
    Load the snapshot and build a freshly refreshed engine.

    Raises:
        HTTPException: on configuration or snapshot errors
    """
    try:
        validate_config()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=f"Configuration error: {e}")

    try:
        snapshot = load_snapshot(get_snapshot_path())
    except SnapshotError as e:
        raise HTTPException(status_code=500, detail=str(e))

    engine = HabitEngine(week_start=get_week_start(), lookback_days=get_lookback_days())
    engine.refresh(snapshot.habits, snapshot.records, _today())
    return engine


def get_engine() -> HabitEngine:
    """Return the current engine, loading it on first use or on a new day."""
    global _engine
    engine = _engine
    if engine is not None and engine.today == _today():
        return engine

    with _engine_lock:
        if _engine is None or _engine.today != _today():
            _engine = _load_engine()
        return _engine


def _habit_or_404(engine: HabitEngine, habit_id: str) -> Habit:
    try:
        return engine.habit(habit_id)
    except HabitNotFoundError:
        raise HTTPException(status_code=404, detail="Habit not found")


def _habit_dict(habit: Habit) -> dict:
    return {
        "id": habit.id,
        "title": habit.title,
        "icon_name": habit.icon_name,
        "color_hex": habit.color_hex,
        "schedule": habit.schedule.to_dict(),
        "is_archived": habit.is_archived,
    }


def _streak_dict(engine: HabitEngine, habit_id: str) -> dict:
    streak = engine.streak(habit_id)
    emoji, message = get_streak_badge(streak.current, streak.longest)
    return {
        "as_of": streak.as_of.isoformat(),
        "current": streak.current,
        "longest": streak.longest,
        "badge": emoji,
        "message": message,
    }


def _summary_dict(summary: DailySummary) -> dict:
    return {
        "date": summary.day.isoformat(),
        "scheduled": summary.scheduled_count,
        "completed": summary.completed_count,
        "completion_rate": round(summary.completion_rate, 4),
        "habits": [
            {
                "id": habit.id,
                "title": habit.title,
                "completed": summary.is_completed(habit.id),
            }
            for habit in summary.scheduled_habits
        ],
    }


def _grid_dict(grid: list[list[HeatCell]]) -> list[list[dict]]:
    return [[cell.to_dict() for cell in week] for week in grid]


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/", response_class=HTMLResponse)
def index(request: Request):
    """Render the yearly heatmap page."""
    engine = get_engine()
    data = {
        "today": engine.today.isoformat(),
        "grid": engine.year_heatmap(),
        "habits": [
            {"habit": habit, "streak": engine.streak(habit.id)}
            for habit in engine.habits()
        ],
        "level_chars": LEVEL_CHARS,
    }
    return templates.TemplateResponse(request, "index.html", data)


@app.post("/api/refresh")
def refresh():
    """
    Reload the snapshot and recompute everything.

    Returns:
        JSON with the snapshot size and the day computations are based on
    """
    global _engine
    with _engine_lock:
        _engine = engine = _load_engine()
    return {
        "today": engine.today.isoformat(),
        "habits": len(engine.habits(include_archived=True)),
    }


@app.get("/api/habits")
def get_habits():
    """
    Get non-archived habits with their streaks.

    Returns:
        JSON with habits list
    """
    engine = get_engine()
    return {
        "habits": [
            {**_habit_dict(habit), "streak": _streak_dict(engine, habit.id)}
            for habit in engine.habits()
        ]
    }


@app.get("/api/habits/{habit_id}/streak")
def get_habit_streak(habit_id: str):
    """Get current and longest streak of a habit."""
    engine = get_engine()
    _habit_or_404(engine, habit_id)
    return {"habit_id": habit_id, "streak": _streak_dict(engine, habit_id)}


@app.get("/api/habits/{habit_id}/heatmap")
def get_habit_heatmap(habit_id: str, weeks: int = Query(MINI_WEEKS, ge=1, le=YEAR_WEEKS)):
    """
    Get the per-habit heatmap.

    Args:
        habit_id: The habit ID
        weeks: Number of weeks (default 10)

    Returns:
        JSON with flat, column-major cells carrying inactive/pending/completed state
    """
    engine = get_engine()
    _habit_or_404(engine, habit_id)
    cells = engine.mini_heatmap(habit_id, weeks)
    return {
        "habit_id": habit_id,
        "weeks": weeks,
        "cells": [cell.to_dict() for cell in cells],
    }


@app.get("/api/summaries")
def get_summaries(
    start: date,
    days: int = Query(7, ge=1, le=MAX_SUMMARY_DAYS),
):
    """
    Get per-day scheduled and completed habit counts.

    Args:
        start: First day (YYYY-MM-DD)
        days: Number of days (1-371)
    """
    engine = get_engine()
    summaries = engine.summaries(start, days)
    return {"days": [_summary_dict(s) for s in summaries.values()]}


@app.get("/api/summaries/{day}")
def get_day_summary(day: date):
    """Get the habits scheduled on one day and which of them were completed."""
    engine = get_engine()
    return _summary_dict(engine.summary(day))


@app.get("/api/heatmap")
def get_heatmap(view: HeatmapView = HeatmapView.YEAR):
    """
    Get the aggregate heatmap.

    Args:
        view: "year" (53 weeks) or "grass" (14 weeks, widget size)

    Returns:
        JSON with week columns of 7 cells, each with a 0-4 level
    """
    engine = get_engine()
    week_count = YEAR_WEEKS if view is HeatmapView.YEAR else GRASS_WEEKS
    grid = engine.heatmap(week_count)
    return {
        "view": view.value,
        "today": engine.today.isoformat(),
        "weeks": _grid_dict(grid),
    }


@app.get("/api/week")
def get_week(day: date | None = None):
    """
    Get this week's completion strip for every current habit.

    Args:
        day: Any day of the wanted week (default today)
    """
    engine = get_engine()
    statuses = engine.week_statuses(day)
    return {
        "week_start": statuses[0].days[0].isoformat() if statuses else None,
        "habits": [
            {**_habit_dict(s.habit), **s.to_dict()} for s in statuses
        ],
    }


@app.get("/api/due-today")
def get_due_today(limit: int = Query(DUE_TODAY_LIMIT, ge=1, le=50)):
    """
    Get the current habits scheduled today with this week's completion strip.

    Args:
        limit: Maximum number of habits (default 3)
    """
    engine = get_engine()
    return {
        "today": engine.today.isoformat(),
        "habits": [
            {**_habit_dict(s.habit), **s.to_dict()} for s in engine.due_today(limit)
        ],
    }
