"""Tests for reminder configuration validation.

Run with: pytest tests/test_config.py -v
"""

from dataclasses import replace

import pytest

from event_rsvp.config.reminders import ReminderConfig


def test_default_values(monkeypatch):
    for name in (
        "REMINDER_INTERVAL_MINUTES",
        "REMINDER_WINDOW_START_MINUTES",
        "REMINDER_WINDOW_END_MINUTES",
        "NOTIFICATION_TIMEOUT_SECONDS",
        "REMINDER_REQUIRE_ALL_DELIVERIES",
    ):
        monkeypatch.delenv(name, raising=False)

    config = ReminderConfig()

    assert (config.interval_minutes, config.window_start_minutes, config.window_end_minutes) == (5, 55, 65)
    assert config.notification_timeout_seconds == 10.0
    assert config.require_all_deliveries is False
    assert config.validate() is True


def test_values_read_from_environment(monkeypatch):
    monkeypatch.setenv("REMINDER_INTERVAL_MINUTES", "2")
    monkeypatch.setenv("REMINDER_REQUIRE_ALL_DELIVERIES", "true")

    config = ReminderConfig()

    assert config.interval_minutes == 2
    assert config.require_all_deliveries is True


@pytest.mark.parametrize("changes", [
    {"interval_minutes": 0},
    {"window_start_minutes": -1},
    {"window_end_minutes": 55},
    {"window_start_minutes": 60, "window_end_minutes": 62},
    {"notification_timeout_seconds": 0},
])
def test_invalid_values_are_rejected(reminder_config, changes):
    with pytest.raises(ValueError):
        replace(reminder_config, **changes).validate()
