"""Event model definition."""

from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, Enum, Index, Integer, String, Text
)
from sqlalchemy.orm import relationship

from .base import Base
from ..domain import models as domain
from ..domain.models import EventCategory
from ..utils.timezone import ensure_utc, now_utc


class Event(Base):
    """
    Persistence model for a scheduled event.

    Fields:
        id: Opaque identifier (uuid string)
        organizer_id: Owner of the event
        title: Event title
        description: Event description
        category: Kind of event (live stream, concert, ...)
        start_time: When the event starts (UTC)
        end_time: When the event ends (optional)
        venue: Where the event takes place (optional)
        stream_url: Link to the live stream (optional)
        ticket_url: Link to buy tickets (optional)
        is_virtual: Whether the event happens online
        attendee_count: Number of live attendances, maintained by the attendance ledger only
        reminder_sent: Whether reminders went out, set once by the reminder dispatcher
        created_at: When the event was created
        updated_at: When the event was last changed
    """
    __tablename__ = 'events'

    id = Column(String(36), primary_key=True)
    organizer_id = Column(String(64), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(
        Enum(EventCategory, name='event_category', values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=True)
    venue = Column(String(255), nullable=True)
    stream_url = Column(String(500), nullable=True)
    ticket_url = Column(String(500), nullable=True)
    is_virtual = Column(Boolean, nullable=False, default=False)
    attendee_count = Column(Integer, nullable=False, default=0)
    reminder_sent = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_utc, onupdate=now_utc)

    attendances = relationship(
        'Attendance',
        back_populates='event',
        cascade='all, delete-orphan',
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint('attendee_count >= 0', name='check_attendee_count_non_negative'),
        Index('ix_events_organizer_start', 'organizer_id', 'start_time'),
        Index('ix_events_start_reminder', 'start_time', 'reminder_sent'),
    )

    @classmethod
    def from_domain(cls, event: domain.Event) -> 'Event':
        """Build a new row from a domain event. Counters always start at zero."""
        return cls(
            id=event.id,
            organizer_id=event.organizer_id,
            title=event.title,
            description=event.description,
            category=event.category,
            start_time=ensure_utc(event.start_time),
            end_time=ensure_utc(event.end_time),
            venue=event.venue,
            stream_url=event.stream_url,
            ticket_url=event.ticket_url,
            is_virtual=event.is_virtual,
            attendee_count=0,
            reminder_sent=False,
        )

    def to_domain(self) -> domain.Event:
        """Convert to an immutable domain event."""
        return domain.Event(
            id=self.id,
            organizer_id=self.organizer_id,
            title=self.title,
            description=self.description,
            category=EventCategory(self.category),
            start_time=ensure_utc(self.start_time),
            end_time=ensure_utc(self.end_time),
            venue=self.venue,
            stream_url=self.stream_url,
            ticket_url=self.ticket_url,
            is_virtual=bool(self.is_virtual),
            attendee_count=self.attendee_count,
            reminder_sent=bool(self.reminder_sent),
            created_at=ensure_utc(self.created_at),
            updated_at=ensure_utc(self.updated_at),
        )

    def __str__(self) -> str:
        """String representation."""
        return f"Event(id={self.id}, title={self.title}, start_time={self.start_time})"
