"""Tests for the reminder command-line script.

Run with: pytest tests/test_reminders_cli.py -v
"""

import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).parent.parent / "scripts" / "reminders.py"


@pytest.fixture
def cli(monkeypatch):
    for name in ("REMINDER_INTERVAL_MINUTES", "REMINDER_WINDOW_START_MINUTES", "REMINDER_WINDOW_END_MINUTES"):
        monkeypatch.delenv(name, raising=False)
    module_spec = importlib.util.spec_from_file_location("reminders_cli", SCRIPT)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


def test_serve_rejects_interval_wider_than_window(cli, capsys, monkeypatch):
    monkeypatch.setattr(cli, "ReminderScheduler", pytest.fail)

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["serve", "--interval", "15"])

    assert exc_info.value.code == 2
    assert "at least as wide as the run interval" in capsys.readouterr().err


def test_serve_rejects_zero_interval(cli, capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["serve", "--interval", "0"])

    assert exc_info.value.code == 2
    assert "REMINDER_INTERVAL_MINUTES must be at least 1" in capsys.readouterr().err


def test_run_once_rejects_invalid_environment(cli, capsys, monkeypatch):
    monkeypatch.setenv("REMINDER_WINDOW_END_MINUTES", "50")

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run-once"])

    assert exc_info.value.code == 2
    assert "window end must be after window start" in capsys.readouterr().err


def test_interval_override_is_applied(cli):
    args = cli.argparse.Namespace(interval=10)

    assert cli.load_reminder_config(args).interval_minutes == 10
