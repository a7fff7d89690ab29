"""
Configuration management for habit-grass.

Loads settings from environment variables (and a .env file if present).
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from habitgrass.models import Weekday
from habitgrass.streak_calculator import DEFAULT_LOOKBACK_DAYS

# Load .env file from project root
load_dotenv()

DEFAULT_LOG_LEVEL = "WARNING"

WEEK_STARTS = {
    "sunday": Weekday.SUNDAY,
    "monday": Weekday.MONDAY,
}


def get_snapshot_path() -> Path:
    """Path of the habit snapshot JSON file."""
    env_path = os.environ.get("HABIT_GRASS_SNAPSHOT_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".habit-grass" / "snapshot.json"


def get_week_start() -> Weekday:
    """First weekday of heatmap columns, Sunday unless configured otherwise."""
    value = os.environ.get("HABIT_GRASS_WEEK_START", "sunday").strip().lower()
    return WEEK_STARTS.get(value, Weekday.SUNDAY)


def get_lookback_days() -> int:
    """Window of the longest-streak scan in days."""
    value = os.environ.get("HABIT_GRASS_LOOKBACK_DAYS")
    try:
        return int(value) if value else DEFAULT_LOOKBACK_DAYS
    except ValueError:
        return DEFAULT_LOOKBACK_DAYS


def get_log_level() -> str:
    return os.environ.get("HABIT_GRASS_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()


def validate_config():
    """Validate that configured values can be used."""
    invalid = []

    week_start = os.environ.get("HABIT_GRASS_WEEK_START")
    if week_start and week_start.strip().lower() not in WEEK_STARTS:
        invalid.append("HABIT_GRASS_WEEK_START (expected 'sunday' or 'monday')")

    lookback = os.environ.get("HABIT_GRASS_LOOKBACK_DAYS")
    if lookback:
        try:
            if int(lookback) < 0:
                raise ValueError(lookback)
        except ValueError:
            invalid.append("HABIT_GRASS_LOOKBACK_DAYS (expected a non-negative integer)")

    if get_log_level() not in logging.getLevelNamesMapping():
        invalid.append("HABIT_GRASS_LOG_LEVEL (expected DEBUG, INFO, WARNING or ERROR)")

    if invalid:
        raise ValueError(
            f"Invalid configuration: {', '.join(invalid)}\n"
            "Please check your environment or .env file."
        )


def configure_logging() -> None:
    """Configure root logging at the configured level."""
    level = get_log_level()
    logging.basicConfig(
        level=level if level in logging.getLevelNamesMapping() else DEFAULT_LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
