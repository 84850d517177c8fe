"""Tests for the background reminder scheduler.

Run with: pytest tests/test_scheduler.py -v
"""

from datetime import timedelta
from unittest.mock import MagicMock

from event_rsvp.scheduler import JOB_ID, ReminderScheduler
from event_rsvp.services import DispatchReport


def test_job_is_registered_without_overlap(dispatcher, reminder_config):
    scheduler = ReminderScheduler(dispatcher, reminder_config)

    scheduler.start(run_immediately=False)
    try:
        assert scheduler.is_running is True
        job = scheduler._scheduler.get_job(JOB_ID)
        assert job.max_instances == 1
        assert job.coalesce is True
        assert job.trigger.interval == timedelta(minutes=5)
        assert job.misfire_grace_time == 300
        assert job.next_run_time is not None
    finally:
        scheduler.shutdown(wait=True)

    assert scheduler.is_running is False


def test_start_twice_keeps_one_job(dispatcher, reminder_config):
    scheduler = ReminderScheduler(dispatcher, reminder_config)

    scheduler.start(run_immediately=False)
    try:
        scheduler.start(run_immediately=False)
        assert len(scheduler._scheduler.get_jobs()) == 1
    finally:
        scheduler.shutdown()


def test_shutdown_when_stopped_is_noop(dispatcher, reminder_config):
    ReminderScheduler(dispatcher, reminder_config).shutdown()


def test_tick_runs_dispatcher(reminder_config, clock):
    dispatcher = MagicMock()
    dispatcher.run_once.return_value = DispatchReport(started_at=clock(), selected=["e1"], marked_sent=["e1"])

    ReminderScheduler(dispatcher, reminder_config)._tick()

    dispatcher.run_once.assert_called_once_with()


def test_tick_tolerates_skipped_run(reminder_config):
    dispatcher = MagicMock()
    dispatcher.run_once.return_value = None

    ReminderScheduler(dispatcher, reminder_config)._tick()

    dispatcher.run_once.assert_called_once_with()


def test_tick_sends_due_reminders(dispatcher, gateway, ledger, store, reminder_config, make_event):
    event = make_event(starts_in=timedelta(minutes=60))
    ledger.join(event.id, "fan-1")

    ReminderScheduler(dispatcher, reminder_config)._tick()

    assert [call[0] for call in gateway.sent] == ["fan-1"]
    assert store.get_event(event.id).reminder_sent is True
