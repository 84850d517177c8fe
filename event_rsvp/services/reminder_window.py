"""Selection of events that are due for a reminder.

An event qualifies when its start time lies between now + 55 minutes and
now + 65 minutes (both ends included) and reminder_sent is still False.
The window is wider than the 5 minute run interval, so a delayed or skipped
run still sees every event at least once.
"""

from datetime import datetime, timedelta
from typing import Optional

from event_rsvp.config.reminders import ReminderConfig
from event_rsvp.domain import Event
from event_rsvp.stores.interfaces import EventStore

DEFAULT_WINDOW_START = timedelta(minutes=55)
DEFAULT_WINDOW_END = timedelta(minutes=65)


def reminder_window(now: datetime, config: Optional[ReminderConfig] = None) -> tuple[datetime, datetime]:
    """Return the (lower, upper) start-time bounds for reminders due at `now`."""
    if config is None:
        return now + DEFAULT_WINDOW_START, now + DEFAULT_WINDOW_END
    return (
        now + timedelta(minutes=config.window_start_minutes),
        now + timedelta(minutes=config.window_end_minutes),
    )


def select_events_due_for_reminder(
    store: EventStore, now: datetime, config: Optional[ReminderConfig] = None
) -> list[Event]:
    """Read the events whose reminders are due at `now`. Has no side effects."""
    lower, upper = reminder_window(now, config)
    return store.find_events_starting_between(lower, upper, reminder_sent=False)
