"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. The two attendance
writes are the only code paths allowed to touch attendee_count, and
mark_reminder_sent is the only one allowed to touch reminder_sent.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from event_rsvp.domain import Attendance, Event


class EventStore(ABC):
    """Interface for event and attendance persistence operations."""

    # Fields organizers are allowed to change through update_event
    UPDATABLE_FIELDS = frozenset({
        "title",
        "description",
        "category",
        "start_time",
        "end_time",
        "venue",
        "stream_url",
        "ticket_url",
        "is_virtual",
    })

    @abstractmethod
    def get_event(self, event_id: str) -> Optional[Event]:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def add_event(self, event: Event) -> Event:
        """Persist a new event with attendee_count 0 and reminder_sent False."""
        ...

    @abstractmethod
    def update_event(self, event_id: str, changes: Mapping[str, Any]) -> Optional[Event]:
        """Apply organizer field changes and return the updated event, or None if missing.

        Raises:
            ValueError: If changes name a field outside UPDATABLE_FIELDS.
        """
        ...

    @abstractmethod
    def delete_event(self, event_id: str) -> bool:
        """Delete an event and its attendances. Returns False if it did not exist."""
        ...

    @abstractmethod
    def find_events_starting_between(
        self, lower: datetime, upper: datetime, reminder_sent: bool = False
    ) -> list[Event]:
        """Return events with lower <= start_time <= upper, ordered by start_time."""
        ...

    @abstractmethod
    def list_events_by_organizer(
        self, organizer_id: str, skip: int, limit: int
    ) -> tuple[list[Event], int]:
        """Return one slice of an organizer's events by start_time ascending, plus the total."""
        ...

    @abstractmethod
    def list_upcoming_events_by_organizers(
        self, organizer_ids: Iterable[str], after: datetime, skip: int, limit: int
    ) -> tuple[list[Event], int]:
        """Return events of the given organizers starting strictly after `after`."""
        ...

    @abstractmethod
    def mark_reminder_sent(self, event_id: str) -> bool:
        """Flip reminder_sent from False to True. Returns whether a row changed."""
        ...

    @abstractmethod
    def get_attendance(self, event_id: str, attendee_id: str) -> Optional[Attendance]:
        """Return the live attendance for the pair, or None."""
        ...

    @abstractmethod
    def list_attendances(
        self, event_id: str, skip: int, limit: int
    ) -> tuple[list[Attendance], int]:
        """Return attendances by created_at ascending plus a total counted from live rows."""
        ...

    @abstractmethod
    def list_attendances_by_attendee(
        self, attendee_id: str, skip: int, limit: int
    ) -> tuple[list[Attendance], int]:
        """Return one attendee's attendances, newest first, plus the total."""
        ...

    @abstractmethod
    def list_reminder_recipients(self, event_id: str) -> list[Attendance]:
        """Return attendances of an event with reminder_opt_in set."""
        ...

    @abstractmethod
    def add_attendance(self, attendance: Attendance) -> Attendance:
        """Insert the attendance and increment attendee_count in one transaction.

        Raises:
            UniqueViolationError: If the (event_id, attendee_id) pair already exists.
            RecordNotFoundError: If the event row is gone.
        """
        ...

    @abstractmethod
    def remove_attendance(self, event_id: str, attendee_id: str) -> None:
        """Delete the attendance and decrement attendee_count in one transaction.

        Raises:
            RecordNotFoundError: If the attendance row is gone.
            CounterUnderflowError: If the decrement would make attendee_count negative.
        """
        ...
