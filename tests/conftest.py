"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from event_rsvp import models as orm
from event_rsvp.config.reminders import ReminderConfig
from event_rsvp.db import Database, DatabaseConfig
from event_rsvp.domain import Event, EventCategory
from event_rsvp.services import AttendanceLedger, EventService, NotificationGateway, ReminderDispatcher
from event_rsvp.stores import SqlAlchemyEventStore

NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class RecordingGateway(NotificationGateway):
    """Gateway that records every reminder; attendees in `fail_for` raise."""

    def __init__(self):
        self.sent = []
        self.fail_for = set()

    def send_event_reminder(self, attendee_id, event_id, event_title, start_time):
        if attendee_id in self.fail_for:
            raise RuntimeError(f"push service rejected {attendee_id}")
        self.sent.append((attendee_id, event_id, event_title, start_time))
        return True


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def database():
    database = Database(DatabaseConfig(url="sqlite://"))
    database.init_db()
    yield database
    database.dispose()


@pytest.fixture
def store(database) -> SqlAlchemyEventStore:
    return SqlAlchemyEventStore(database)


@pytest.fixture
def ledger(store, clock) -> AttendanceLedger:
    return AttendanceLedger(store, clock=clock)


@pytest.fixture
def event_service(store, clock) -> EventService:
    return EventService(store, clock=clock)


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def reminder_config() -> ReminderConfig:
    return ReminderConfig(
        interval_minutes=5,
        window_start_minutes=55,
        window_end_minutes=65,
        notification_timeout_seconds=2.0,
        require_all_deliveries=False,
        scheduler_enabled=False,
    )


@pytest.fixture
def dispatcher(store, gateway, reminder_config, clock):
    dispatcher = ReminderDispatcher(store, gateway, config=reminder_config, clock=clock)
    yield dispatcher
    dispatcher.close()


@pytest.fixture
def make_event(store, clock):
    """Insert an event starting `starts_in` after the fake clock's now."""

    def _make_event(starts_in=timedelta(hours=2), organizer_id="organizer-1", title="Live Show", **fields):
        return store.add_event(Event(
            organizer_id=organizer_id,
            title=title,
            description="A live show",
            category=fields.pop("category", EventCategory.LIVE_STREAM),
            start_time=clock() + starts_in,
            **fields,
        ))

    return _make_event


@pytest.fixture
def force_attendee_count(database):
    """Overwrite attendee_count behind the ledger's back to simulate drift."""

    def _force(event_id: str, value: int) -> None:
        with database.session() as session:
            session.query(orm.Event).filter(orm.Event.id == event_id).update(
                {orm.Event.attendee_count: value}, synchronize_session=False
            )

    return _force


@pytest.fixture
def file_database(tmp_path):
    """SQLite file database with a real connection pool, for threaded tests."""
    database = Database(DatabaseConfig(url=f"sqlite:///{tmp_path / 'events.db'}"))
    database.init_db()
    yield database
    database.dispose()
