"""Event service - organizer operations and the followed-organizer feed."""

import logging
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Optional

from event_rsvp.domain import (
    Event,
    EventCategory,
    EventNotFoundError,
    InvalidEventTimesError,
    NotEventOwnerError,
    Page,
    PageFilter,
    PastEventError,
)
from event_rsvp.stores.interfaces import EventStore
from event_rsvp.utils.timezone import ensure_utc, now_utc

logger = logging.getLogger(__name__)


class EventService:
    """Service for event catalog operations."""

    def __init__(self, store: EventStore, clock: Callable[[], datetime] = now_utc) -> None:
        self._store = store
        self._clock = clock

    def create_event(
        self,
        organizer_id: str,
        title: str,
        description: str,
        category: EventCategory,
        start_time: datetime,
        end_time: Optional[datetime] = None,
        venue: Optional[str] = None,
        stream_url: Optional[str] = None,
        ticket_url: Optional[str] = None,
        is_virtual: bool = False,
    ) -> Event:
        """Create an event owned by organizer_id.

        Raises:
            PastEventError: If start_time is not strictly in the future.
            InvalidEventTimesError: If end_time is before start_time.
        """
        start_time = ensure_utc(start_time)
        end_time = ensure_utc(end_time)
        self._require_future(start_time)
        if end_time is not None and end_time < start_time:
            raise InvalidEventTimesError()

        event = self._store.add_event(Event(
            organizer_id=organizer_id,
            title=title,
            description=description,
            category=EventCategory(category),
            start_time=start_time,
            end_time=end_time,
            venue=venue,
            stream_url=stream_url,
            ticket_url=ticket_url,
            is_virtual=is_virtual,
        ))
        logger.info(f"Organizer {organizer_id} created event {event.id} starting {event.start_time}")
        return event

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def update_event(self, event_id: str, organizer_id: str, changes: Mapping[str, Any]) -> Event:
        """Apply organizer changes to an event.

        Fields set to None are left untouched. A new start time must be in the
        future; the counters cannot be changed here.

        Raises:
            EventNotFoundError: If the event does not exist.
            NotEventOwnerError: If organizer_id does not own the event.
            PastEventError: If a changed start_time is not in the future.
            InvalidEventTimesError: If the result would end before it starts.
        """
        event = self.get_event(event_id)
        if event.organizer_id != organizer_id:
            raise NotEventOwnerError("update")

        updates = {
            field: value for field, value in changes.items()
            if value is not None and field in EventStore.UPDATABLE_FIELDS
        }
        if 'start_time' in updates:
            updates['start_time'] = ensure_utc(updates['start_time'])
            if updates['start_time'] != event.start_time:
                self._require_future(updates['start_time'])
        if 'end_time' in updates:
            updates['end_time'] = ensure_utc(updates['end_time'])
        if 'category' in updates:
            updates['category'] = EventCategory(updates['category'])

        start_time = updates.get('start_time', event.start_time)
        end_time = updates.get('end_time', event.end_time)
        if end_time is not None and end_time < start_time:
            raise InvalidEventTimesError()

        if not updates:
            return event

        updated = self._store.update_event(event_id, updates)
        if updated is None:
            raise EventNotFoundError(event_id)
        logger.info(f"Organizer {organizer_id} updated event {event_id}: {sorted(updates)}")
        return updated

    def delete_event(self, event_id: str, organizer_id: str) -> None:
        """Delete an event and, with it, all of its attendances.

        Raises:
            EventNotFoundError: If the event does not exist.
            NotEventOwnerError: If organizer_id does not own the event.
        """
        event = self.get_event(event_id)
        if event.organizer_id != organizer_id:
            raise NotEventOwnerError("delete")

        if not self._store.delete_event(event_id):
            raise EventNotFoundError(event_id)
        logger.info(f"Organizer {organizer_id} deleted event {event_id}")

    def list_organizer_events(self, organizer_id: str, page=None, limit=None) -> Page[Event]:
        """Return one page of an organizer's events ordered by start time."""
        page_filter = PageFilter.normalize(page, limit)
        items, total = self._store.list_events_by_organizer(
            organizer_id, page_filter.skip, page_filter.limit
        )
        return Page.build(items, total, page_filter)

    def feed(self, followed_organizer_ids: Iterable[str], page=None, limit=None) -> Page[Event]:
        """Return upcoming events from followed organizers, soonest first.

        Following nobody yields an empty page without touching the store.
        """
        page_filter = PageFilter.normalize(page, limit)
        organizer_ids = sorted({organizer_id for organizer_id in followed_organizer_ids if organizer_id})
        if not organizer_ids:
            return Page.empty(page_filter)

        items, total = self._store.list_upcoming_events_by_organizers(
            organizer_ids, self._clock(), page_filter.skip, page_filter.limit
        )
        return Page.build(items, total, page_filter)

    def _require_future(self, start_time: datetime) -> None:
        if start_time <= self._clock():
            raise PastEventError()
