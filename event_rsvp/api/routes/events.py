"""Events router module: organizer operations and the followed-organizer feed."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from ..dependencies import get_current_user_id, get_event_service
from ..schemas import EventCreate, EventOut, EventPageOut, EventUpdate
from ...services import EventService

router = APIRouter(prefix="/events", tags=["events"])


@router.post("", response_model=EventOut, status_code=201)
def create_event(
    body: EventCreate,
    organizer_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
):
    """Create a new event owned by the caller."""
    return service.create_event(organizer_id=organizer_id, **body.model_dump())


@router.get("/feed", response_model=EventPageOut)
def get_feed(
    followed: List[str] = Query(default=[]),
    page: Optional[int] = None,
    limit: Optional[int] = None,
    service: EventService = Depends(get_event_service),
):
    """Get upcoming events from followed organizers.

    The follow graph lives outside this service, so the caller passes the
    followed organizer ids as repeated `followed` query parameters.
    """
    return EventPageOut.from_page(service.feed(followed, page, limit))


@router.get("/organizer/{organizer_id}", response_model=EventPageOut)
def list_organizer_events(
    organizer_id: str,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    service: EventService = Depends(get_event_service),
):
    """Get all events for a specific organizer."""
    return EventPageOut.from_page(service.list_organizer_events(organizer_id, page, limit))


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, service: EventService = Depends(get_event_service)):
    """Get a single event by ID."""
    return service.get_event(event_id)


@router.put("/{event_id}", response_model=EventOut)
def update_event(
    event_id: str,
    body: EventUpdate,
    organizer_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
):
    """Update an event (organizer only)."""
    return service.update_event(event_id, organizer_id, body.model_dump(exclude_none=True))


@router.delete("/{event_id}", status_code=204)
def delete_event(
    event_id: str,
    organizer_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
):
    """Delete an event (organizer only)."""
    service.delete_event(event_id, organizer_id)
    return Response(status_code=204)
