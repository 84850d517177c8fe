"""Request and response bodies for the HTTP API."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain import EventCategory, Page

URL_PATTERN = r'^https?://'


class EventCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=255)
    description: str = Field(..., min_length=1)
    category: EventCategory
    start_time: datetime
    end_time: Optional[datetime] = None
    venue: Optional[str] = Field(None, max_length=255)
    stream_url: Optional[str] = Field(None, max_length=500, pattern=URL_PATTERN)
    ticket_url: Optional[str] = Field(None, max_length=500, pattern=URL_PATTERN)
    is_virtual: bool = False


class EventUpdate(BaseModel):
    """Partial update; omitted or null fields keep their current value."""

    title: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[EventCategory] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    venue: Optional[str] = Field(None, max_length=255)
    stream_url: Optional[str] = Field(None, max_length=500, pattern=URL_PATTERN)
    ticket_url: Optional[str] = Field(None, max_length=500, pattern=URL_PATTERN)
    is_virtual: Optional[bool] = None


class JoinRequest(BaseModel):
    reminder_opt_in: bool = True


class EventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    organizer_id: str
    title: str
    description: str
    category: EventCategory
    start_time: datetime
    end_time: Optional[datetime]
    venue: Optional[str]
    stream_url: Optional[str]
    ticket_url: Optional[str]
    is_virtual: bool
    attendee_count: int
    reminder_sent: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class AttendanceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    event_id: str
    attendee_id: str
    reminder_opt_in: bool
    created_at: Optional[datetime]


class EventPageOut(BaseModel):
    data: List[EventOut]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page) -> 'EventPageOut':
        return cls(
            data=[EventOut.model_validate(event) for event in page.data],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )


class AttendancePageOut(BaseModel):
    data: List[AttendanceOut]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page) -> 'AttendancePageOut':
        return cls(
            data=[AttendanceOut.model_validate(attendance) for attendance in page.data],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )
