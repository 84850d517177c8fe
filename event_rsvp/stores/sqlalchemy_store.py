"""SQLAlchemy implementation of the EventStore.

Every method opens its own session, so calls must not be nested. Both
attendance writes touch the event row first; on PostgreSQL that row lock
serializes concurrent joins and leaves on the same event.
"""

import logging
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from event_rsvp import models as orm
from event_rsvp.db import (
    CounterUnderflowError,
    Database,
    RecordNotFoundError,
    UniqueViolationError,
    with_retry,
)
from event_rsvp.domain import Attendance, Event
from event_rsvp.stores.interfaces import EventStore
from event_rsvp.utils.timezone import ensure_utc

logger = logging.getLogger(__name__)


class SqlAlchemyEventStore(EventStore):
    """Relational event store backed by a Database session manager."""

    def __init__(self, database: Database) -> None:
        self._db = database

    # Events

    def get_event(self, event_id: str) -> Optional[Event]:
        with self._db.session() as session:
            row = session.get(orm.Event, event_id)
            return row.to_domain() if row else None

    @with_retry()
    def add_event(self, event: Event) -> Event:
        with self._db.session() as session:
            row = orm.Event.from_domain(event)
            session.add(row)
            session.flush()
            return row.to_domain()

    @with_retry()
    def update_event(self, event_id: str, changes: Mapping[str, Any]) -> Optional[Event]:
        unknown = set(changes) - self.UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated directly: {sorted(unknown)}")

        with self._db.session() as session:
            row = session.get(orm.Event, event_id)
            if row is None:
                return None
            for field, value in changes.items():
                if isinstance(value, datetime):
                    value = ensure_utc(value)
                setattr(row, field, value)
            session.flush()
            return row.to_domain()

    @with_retry()
    def delete_event(self, event_id: str) -> bool:
        with self._db.session() as session:
            # Attendances go with it through ON DELETE CASCADE
            deleted = session.query(orm.Event).filter(orm.Event.id == event_id).delete(
                synchronize_session=False
            )
            return deleted > 0

    def find_events_starting_between(
        self, lower: datetime, upper: datetime, reminder_sent: bool = False
    ) -> list[Event]:
        with self._db.session() as session:
            rows = (
                session.query(orm.Event)
                .filter(
                    orm.Event.start_time.between(ensure_utc(lower), ensure_utc(upper)),
                    orm.Event.reminder_sent.is_(reminder_sent),
                )
                .order_by(orm.Event.start_time, orm.Event.id)
                .all()
            )
            return [row.to_domain() for row in rows]

    def list_events_by_organizer(
        self, organizer_id: str, skip: int, limit: int
    ) -> tuple[list[Event], int]:
        with self._db.session() as session:
            query = session.query(orm.Event).filter(orm.Event.organizer_id == organizer_id)
            total = query.count()
            rows = (
                query.order_by(orm.Event.start_time, orm.Event.id)
                .offset(skip)
                .limit(limit)
                .all()
            )
            return [row.to_domain() for row in rows], total

    def list_upcoming_events_by_organizers(
        self, organizer_ids: Iterable[str], after: datetime, skip: int, limit: int
    ) -> tuple[list[Event], int]:
        organizer_ids = list(organizer_ids)
        with self._db.session() as session:
            query = session.query(orm.Event).filter(
                orm.Event.organizer_id.in_(organizer_ids),
                orm.Event.start_time > ensure_utc(after),
            )
            total = query.count()
            rows = (
                query.order_by(orm.Event.start_time, orm.Event.id)
                .offset(skip)
                .limit(limit)
                .all()
            )
            return [row.to_domain() for row in rows], total

    @with_retry()
    def mark_reminder_sent(self, event_id: str) -> bool:
        with self._db.session() as session:
            updated = (
                session.query(orm.Event)
                .filter(orm.Event.id == event_id, orm.Event.reminder_sent.is_(False))
                .update({orm.Event.reminder_sent: True}, synchronize_session=False)
            )
            return updated == 1

    # Attendances

    def get_attendance(self, event_id: str, attendee_id: str) -> Optional[Attendance]:
        with self._db.session() as session:
            row = (
                session.query(orm.Attendance)
                .filter(
                    orm.Attendance.event_id == event_id,
                    orm.Attendance.attendee_id == attendee_id,
                )
                .one_or_none()
            )
            return row.to_domain() if row else None

    def list_attendances(
        self, event_id: str, skip: int, limit: int
    ) -> tuple[list[Attendance], int]:
        with self._db.session() as session:
            total = (
                session.query(func.count(orm.Attendance.id))
                .filter(orm.Attendance.event_id == event_id)
                .scalar()
            )
            rows = (
                session.query(orm.Attendance)
                .filter(orm.Attendance.event_id == event_id)
                .order_by(orm.Attendance.created_at, orm.Attendance.id)
                .offset(skip)
                .limit(limit)
                .all()
            )
            return [row.to_domain() for row in rows], total

    def list_attendances_by_attendee(
        self, attendee_id: str, skip: int, limit: int
    ) -> tuple[list[Attendance], int]:
        with self._db.session() as session:
            query = session.query(orm.Attendance).filter(orm.Attendance.attendee_id == attendee_id)
            total = query.count()
            rows = (
                query.order_by(orm.Attendance.created_at.desc(), orm.Attendance.id)
                .offset(skip)
                .limit(limit)
                .all()
            )
            return [row.to_domain() for row in rows], total

    def list_reminder_recipients(self, event_id: str) -> list[Attendance]:
        with self._db.session() as session:
            rows = (
                session.query(orm.Attendance)
                .filter(
                    orm.Attendance.event_id == event_id,
                    orm.Attendance.reminder_opt_in.is_(True),
                )
                .order_by(orm.Attendance.created_at, orm.Attendance.id)
                .all()
            )
            return [row.to_domain() for row in rows]

    @with_retry()
    def add_attendance(self, attendance: Attendance) -> Attendance:
        with self._db.session() as session:
            incremented = (
                session.query(orm.Event)
                .filter(orm.Event.id == attendance.event_id)
                .update(
                    {orm.Event.attendee_count: orm.Event.attendee_count + 1},
                    synchronize_session=False,
                )
            )
            if incremented == 0:
                raise RecordNotFoundError(f"Event {attendance.event_id} no longer exists")

            row = orm.Attendance.from_domain(attendance)
            session.add(row)
            try:
                session.flush()
            except IntegrityError as e:
                # The increment above is rolled back with the failed insert
                raise UniqueViolationError(
                    f"Attendance already exists for event {attendance.event_id} "
                    f"and attendee {attendance.attendee_id}"
                ) from e
            return row.to_domain()

    @with_retry()
    def remove_attendance(self, event_id: str, attendee_id: str) -> None:
        with self._db.session() as session:
            decremented = (
                session.query(orm.Event)
                .filter(orm.Event.id == event_id, orm.Event.attendee_count > 0)
                .update(
                    {orm.Event.attendee_count: orm.Event.attendee_count - 1},
                    synchronize_session=False,
                )
            )
            if decremented == 0:
                if session.get(orm.Event, event_id) is None:
                    raise RecordNotFoundError(f"Event {event_id} no longer exists")
                raise CounterUnderflowError(
                    f"attendee_count for event {event_id} would drop below zero"
                )

            deleted = (
                session.query(orm.Attendance)
                .filter(
                    orm.Attendance.event_id == event_id,
                    orm.Attendance.attendee_id == attendee_id,
                )
                .delete(synchronize_session=False)
            )
            if deleted == 0:
                # Rolls back the decrement too
                raise RecordNotFoundError(
                    f"No attendance for event {event_id} and attendee {attendee_id}"
                )
