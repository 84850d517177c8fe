"""Domain models representing persisted state.

These are plain immutable values handed out by stores. SQLAlchemy rows live
in event_rsvp/models and never leave a session.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
import uuid


class EventCategory(str, Enum):
    """Kind of event an organizer can schedule."""

    LIVE_STREAM = "live_stream"
    CONCERT = "concert"
    MEET_GREET = "meet_greet"
    ALBUM_RELEASE = "album_release"


def new_id() -> str:
    """Generate an opaque record identifier."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Event:
    """Domain representation of a scheduled event."""

    organizer_id: str
    title: str
    description: str
    category: EventCategory
    start_time: datetime
    end_time: Optional[datetime] = None
    venue: Optional[str] = None
    stream_url: Optional[str] = None
    ticket_url: Optional[str] = None
    is_virtual: bool = False
    attendee_count: int = 0
    reminder_sent: bool = False
    id: str = field(default_factory=new_id)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Attendance:
    """Domain representation of one attendee's intent to join one event."""

    event_id: str
    attendee_id: str
    reminder_opt_in: bool = True
    id: str = field(default_factory=new_id)
    created_at: Optional[datetime] = None
