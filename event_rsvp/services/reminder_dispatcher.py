"""Reminder dispatcher - the periodic job that notifies attendees of upcoming events.

One run (tick):
1. Select events due for a reminder. A failure here is logged and the run ends.
2. For each event, independently: fetch opted-in attendees, notify each one
   through the gateway, then mark the event as reminded.
3. A failure for one event is logged and the loop moves on; that event stays
   unmarked so the next tick retries it.

The dispatcher keeps no state between runs. The only record of progress is
each event's reminder_sent flag, which is why two runs must never overlap:
a run-level lock makes a second concurrent call return immediately.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from event_rsvp.config.reminders import ReminderConfig
from event_rsvp.domain import Event, ReminderStateError
from event_rsvp.services.notifications import NotificationGateway
from event_rsvp.services.reminder_window import select_events_due_for_reminder
from event_rsvp.stores.interfaces import EventStore
from event_rsvp.utils.timezone import now_utc

logger = logging.getLogger(__name__)


@dataclass
class DispatchReport:
    """Outcome of a single dispatcher run."""
    started_at: datetime
    selected: List[str] = field(default_factory=list)
    marked_sent: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    notifications_sent: int = 0
    notifications_failed: int = 0
    selection_failed: bool = False


class ReminderDispatcher:
    """Sends each opted-in attendee one reminder per event, once."""

    def __init__(
        self,
        store: EventStore,
        gateway: NotificationGateway,
        config: Optional[ReminderConfig] = None,
        clock: Callable[[], datetime] = now_utc,
        max_workers: int = 4,
    ):
        """Initialize the dispatcher.

        Args:
            store: Event store used for selection, recipient lookup and marking
            gateway: Delivers one reminder to one attendee
            config: Window, timeout and delivery settings
            clock: Returns the current UTC time
            max_workers: Threads available for gateway calls; a call that times
                         out keeps its thread until the gateway returns
        """
        self._store = store
        self._gateway = gateway
        self._config = config or ReminderConfig()
        self._config.validate()
        self._clock = clock
        self._max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._run_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        """Whether a run is in progress right now."""
        return self._run_lock.locked()

    def run_once(self) -> Optional[DispatchReport]:
        """Execute one tick. Never raises.

        Returns:
            The run's report, or None if another run was still in progress
        """
        if not self._run_lock.acquire(blocking=False):
            logger.warning("Previous reminder run still in progress, skipping this tick")
            return None
        try:
            return self._dispatch()
        finally:
            self._run_lock.release()

    def close(self) -> None:
        """Release the gateway worker threads without waiting for hung calls."""
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    def _dispatch(self) -> DispatchReport:
        now = self._clock()
        report = DispatchReport(started_at=now)
        logger.debug("Running event reminder dispatch...")

        try:
            events = select_events_due_for_reminder(self._store, now, self._config)
        except Exception:
            logger.exception("Event reminder selection failed")
            report.selection_failed = True
            return report

        if not events:
            logger.debug("No events need reminders right now")
            return report

        logger.info(f"Sending reminders for {len(events)} event(s)")
        for event in events:
            report.selected.append(event.id)
            try:
                self._dispatch_event(event, report)
            except Exception:
                logger.exception(f"Failed to process reminders for event {event.id}")
                report.failed.append(event.id)

        return report

    def _dispatch_event(self, event: Event, report: DispatchReport) -> None:
        recipients = self._store.list_reminder_recipients(event.id)
        logger.info(f"Event '{event.title}' ({event.id}): notifying {len(recipients)} attendees")

        failures = 0
        for attendance in recipients:
            if self._notify(attendance.attendee_id, event):
                report.notifications_sent += 1
            else:
                failures += 1
                report.notifications_failed += 1

        if failures and self._config.require_all_deliveries:
            logger.warning(
                f"{failures} reminder(s) for event {event.id} failed, "
                "leaving it unmarked for the next run"
            )
            report.failed.append(event.id)
            return

        if not self._store.mark_reminder_sent(event.id):
            raise ReminderStateError(event.id)

        report.marked_sent.append(event.id)
        logger.info(f"Reminder marked as sent for event {event.id}")

    def _notify(self, attendee_id: str, event: Event) -> bool:
        timeout = self._config.notification_timeout_seconds
        future = self._get_executor().submit(
            self._gateway.send_event_reminder,
            attendee_id,
            event.id,
            event.title,
            event.start_time,
        )
        try:
            delivered = future.result(timeout=timeout)
        except FuturesTimeoutError:
            future.cancel()
            logger.warning(f"Reminder to {attendee_id} for event {event.id} timed out after {timeout}s")
            return False
        except Exception as e:
            logger.warning(f"Reminder to {attendee_id} for event {event.id} failed: {e}")
            return False

        if not delivered:
            logger.warning(f"Reminder to {attendee_id} for event {event.id} was not delivered")
            return False
        return True

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers,
                thread_name_prefix="reminder-gateway",
            )
        return self._executor
