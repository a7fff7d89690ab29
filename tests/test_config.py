"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest

from habitgrass.config import (
    DEFAULT_LOOKBACK_DAYS,
    get_lookback_days,
    get_snapshot_path,
    get_week_start,
    validate_config,
)
from habitgrass.models import Weekday


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in (
        "HABIT_GRASS_SNAPSHOT_PATH",
        "HABIT_GRASS_WEEK_START",
        "HABIT_GRASS_LOOKBACK_DAYS",
        "HABIT_GRASS_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


class TestDefaults:
    def test_snapshot_path_default(self):
        assert get_snapshot_path() == Path.home() / ".habit-grass" / "snapshot.json"

    def test_week_start_default(self):
        assert get_week_start() == Weekday.SUNDAY

    def test_lookback_default(self):
        assert get_lookback_days() == DEFAULT_LOOKBACK_DAYS

    def test_defaults_are_valid(self):
        validate_config()


class TestOverrides:
    def test_snapshot_path(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HABIT_GRASS_SNAPSHOT_PATH", str(tmp_path / "s.json"))
        assert get_snapshot_path() == tmp_path / "s.json"

    def test_week_start_monday(self, monkeypatch):
        monkeypatch.setenv("HABIT_GRASS_WEEK_START", "Monday")
        assert get_week_start() == Weekday.MONDAY

    def test_lookback(self, monkeypatch):
        monkeypatch.setenv("HABIT_GRASS_LOOKBACK_DAYS", "90")
        assert get_lookback_days() == 90


class TestValidateConfig:
    def test_invalid_week_start(self, monkeypatch):
        monkeypatch.setenv("HABIT_GRASS_WEEK_START", "friday")
        with pytest.raises(ValueError, match="HABIT_GRASS_WEEK_START"):
            validate_config()

    def test_invalid_lookback(self, monkeypatch):
        monkeypatch.setenv("HABIT_GRASS_LOOKBACK_DAYS", "a year")
        with pytest.raises(ValueError, match="HABIT_GRASS_LOOKBACK_DAYS"):
            validate_config()

    def test_negative_lookback(self, monkeypatch):
        monkeypatch.setenv("HABIT_GRASS_LOOKBACK_DAYS", "-1")
        with pytest.raises(ValueError, match="HABIT_GRASS_LOOKBACK_DAYS"):
            validate_config()

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("HABIT_GRASS_LOG_LEVEL", "loud")
        with pytest.raises(ValueError, match="HABIT_GRASS_LOG_LEVEL"):
            validate_config()

    def test_lists_every_problem(self, monkeypatch):
        monkeypatch.setenv("HABIT_GRASS_WEEK_START", "friday")
        monkeypatch.setenv("HABIT_GRASS_LOOKBACK_DAYS", "x")
        with pytest.raises(ValueError) as excinfo:
            validate_config()
        assert "HABIT_GRASS_WEEK_START" in str(excinfo.value)
        assert "HABIT_GRASS_LOOKBACK_DAYS" in str(excinfo.value)
