"""Attendance ledger - join/leave state machine and the attendee counter.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or raise domain errors

The existence, start-time and duplicate checks run as fresh reads before
the write so the transaction itself stays short. They are not what keeps
the ledger correct under races: the store's unique constraint and guarded
decrement are, and their errors are mapped to the same outcomes as the
pre-checks.
"""

import logging
from datetime import datetime
from typing import Callable

from event_rsvp.db import CounterUnderflowError, RecordNotFoundError, UniqueViolationError
from event_rsvp.domain import (
    AlreadyJoinedError,
    Attendance,
    AttendanceNotFoundError,
    CounterInconsistencyError,
    Event,
    EventNotFoundError,
    Page,
    PageFilter,
    PastEventError,
)
from event_rsvp.stores.interfaces import EventStore
from event_rsvp.utils.timezone import now_utc

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Owns attendance records and keeps attendee_count equal to the live rows."""

    def __init__(self, store: EventStore, clock: Callable[[], datetime] = now_utc) -> None:
        self._store = store
        self._clock = clock

    def join(self, event_id: str, attendee_id: str, reminder_opt_in: bool = True) -> Attendance:
        """Record that an attendee joins an upcoming event.

        Raises:
            EventNotFoundError: If the event does not exist.
            PastEventError: If the event has already started.
            AlreadyJoinedError: If the attendee already joined, including when a
                concurrent join wins the race to insert.
        """
        now = self._clock()
        self._get_upcoming_event(event_id, now, "Cannot join a past event")

        if self._store.get_attendance(event_id, attendee_id) is not None:
            raise AlreadyJoinedError(event_id, attendee_id)

        attendance = Attendance(
            event_id=event_id,
            attendee_id=attendee_id,
            reminder_opt_in=reminder_opt_in,
            created_at=now,
        )
        try:
            created = self._store.add_attendance(attendance)
        except UniqueViolationError as e:
            logger.info(f"Concurrent duplicate join for event {event_id} by {attendee_id}: {e}")
            raise AlreadyJoinedError(event_id, attendee_id) from e
        except RecordNotFoundError as e:
            raise EventNotFoundError(event_id) from e

        logger.info(f"Attendee {attendee_id} joined event {event_id}")
        return created

    def leave(self, event_id: str, attendee_id: str) -> None:
        """Remove an attendee from an upcoming event.

        Raises:
            EventNotFoundError: If the event does not exist.
            PastEventError: If the event has already started.
            AttendanceNotFoundError: If the attendee has not joined.
            CounterInconsistencyError: If attendee_count would go negative.
        """
        self._get_upcoming_event(event_id, self._clock(), "Cannot leave a past event")

        if self._store.get_attendance(event_id, attendee_id) is None:
            raise AttendanceNotFoundError(event_id, attendee_id)

        try:
            self._store.remove_attendance(event_id, attendee_id)
        except CounterUnderflowError as e:
            logger.error(f"Attendee counter for event {event_id} is inconsistent: {e}")
            raise CounterInconsistencyError(event_id) from e
        except RecordNotFoundError as e:
            # A concurrent leave removed the row between the check and the write
            raise AttendanceNotFoundError(event_id, attendee_id) from e

        logger.info(f"Attendee {attendee_id} left event {event_id}")

    def list_attendees(self, event_id: str, page=None, limit=None) -> Page[Attendance]:
        """Return one page of an event's attendances, oldest first.

        The total is counted from live rows rather than read from
        attendee_count, so any drift between the two shows up here.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        if self._store.get_event(event_id) is None:
            raise EventNotFoundError(event_id)

        page_filter = PageFilter.normalize(page, limit)
        items, total = self._store.list_attendances(event_id, page_filter.skip, page_filter.limit)
        return Page.build(items, total, page_filter)

    def list_attendances_for(self, attendee_id: str, page=None, limit=None) -> Page[Attendance]:
        """Return one page of the events an attendee has joined, most recent first."""
        page_filter = PageFilter.normalize(page, limit)
        items, total = self._store.list_attendances_by_attendee(
            attendee_id, page_filter.skip, page_filter.limit
        )
        return Page.build(items, total, page_filter)

    def _get_upcoming_event(self, event_id: str, now: datetime, past_message: str) -> Event:
        event = self._store.get_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        if event.start_time <= now:
            raise PastEventError(past_message)
        return event
