"""Model for event attendance (RSVP) records."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base
from ..domain import models as domain
from ..utils.timezone import ensure_utc, now_utc


class Attendance(Base):
    """
    One attendee's intent to join one event.

    Rows are created on join and deleted on leave, never updated in place.
    The (event_id, attendee_id) unique constraint is what excludes racing
    duplicate joins.

    Fields:
        id: Opaque identifier (uuid string)
        event_id: The event being attended
        attendee_id: The user attending
        reminder_opt_in: Whether the attendee wants a reminder, fixed at join time
        created_at: When the attendee joined
    """
    __tablename__ = 'event_attendances'

    id = Column(String(36), primary_key=True)
    event_id = Column(
        String(36),
        ForeignKey('events.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    attendee_id = Column(String(64), nullable=False, index=True)
    reminder_opt_in = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)

    event = relationship('Event', back_populates='attendances')

    __table_args__ = (
        UniqueConstraint('event_id', 'attendee_id', name='uq_event_attendance_attendee'),
    )

    @classmethod
    def from_domain(cls, attendance: domain.Attendance) -> 'Attendance':
        return cls(
            id=attendance.id,
            event_id=attendance.event_id,
            attendee_id=attendance.attendee_id,
            reminder_opt_in=attendance.reminder_opt_in,
            created_at=ensure_utc(attendance.created_at) or now_utc(),
        )

    def to_domain(self) -> domain.Attendance:
        return domain.Attendance(
            id=self.id,
            event_id=self.event_id,
            attendee_id=self.attendee_id,
            reminder_opt_in=bool(self.reminder_opt_in),
            created_at=ensure_utc(self.created_at),
        )

    def __str__(self) -> str:
        return f"Attendance(id={self.id}, event_id={self.event_id}, attendee_id={self.attendee_id})"
