from event_rsvp.domain.errors import (
    AlreadyJoinedError,
    AttendanceNotFoundError,
    CounterInconsistencyError,
    DomainError,
    ErrorCode,
    EventNotFoundError,
    InvalidEventTimesError,
    NotEventOwnerError,
    PastEventError,
    ReminderStateError,
)
from event_rsvp.domain.models import Attendance, Event, EventCategory
from event_rsvp.domain.pagination import Page, PageFilter

__all__ = [
    "Event",
    "Attendance",
    "EventCategory",
    "Page",
    "PageFilter",
    "ErrorCode",
    "DomainError",
    "EventNotFoundError",
    "AttendanceNotFoundError",
    "PastEventError",
    "InvalidEventTimesError",
    "AlreadyJoinedError",
    "CounterInconsistencyError",
    "ReminderStateError",
    "NotEventOwnerError",
]
