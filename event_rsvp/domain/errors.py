"""Domain error codes for the event RSVP ledger.

Every outcome a caller has to handle maps to exactly one ErrorCode. The HTTP
layer translates codes to responses; the dispatcher logs them.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    NOT_FOUND = "NOT_FOUND"
    VALIDATION_FAILURE = "VALIDATION_FAILURE"
    CONFLICT = "CONFLICT"
    INTERNAL_INCONSISTENCY = "INTERNAL_INCONSISTENCY"
    FORBIDDEN = "FORBIDDEN"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event does not exist."""

    def __init__(self, event_id: str) -> None:
        super().__init__(code=ErrorCode.NOT_FOUND, message="Event not found")
        self.event_id = event_id


class AttendanceNotFoundError(DomainError):
    """Raised when an attendee has no live attendance for an event."""

    def __init__(self, event_id: str, attendee_id: str) -> None:
        super().__init__(code=ErrorCode.NOT_FOUND, message="Attendance not found")
        self.event_id = event_id
        self.attendee_id = attendee_id


class PastEventError(DomainError):
    """Raised when an event's start time is not in the future."""

    def __init__(self, message: str = "Event start time must be in the future") -> None:
        super().__init__(code=ErrorCode.VALIDATION_FAILURE, message=message)


class InvalidEventTimesError(DomainError):
    """Raised when an event ends before it starts."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_FAILURE,
            message="Event end time cannot be before its start time",
        )


class AlreadyJoinedError(DomainError):
    """Raised on a second join for the same (event, attendee) pair."""

    def __init__(self, event_id: str, attendee_id: str) -> None:
        super().__init__(code=ErrorCode.CONFLICT, message="Already joined this event")
        self.event_id = event_id
        self.attendee_id = attendee_id


class CounterInconsistencyError(DomainError):
    """Raised when the attendee counter would drop below zero."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.INTERNAL_INCONSISTENCY,
            message="Attendee count is out of sync with attendance records",
        )
        self.event_id = event_id


class ReminderStateError(DomainError):
    """Raised when an event cannot be marked as reminded after notifying."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.INTERNAL_INCONSISTENCY,
            message="Reminder was dispatched but the event could not be marked as sent",
        )
        self.event_id = event_id


class NotEventOwnerError(DomainError):
    """Raised when someone other than the organizer edits an event."""

    def __init__(self, action: str = "modify") -> None:
        super().__init__(
            code=ErrorCode.FORBIDDEN,
            message=f"You can only {action} your own events",
        )
