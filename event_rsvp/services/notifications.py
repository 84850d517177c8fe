"""Notification gateway contract.

The reminder dispatcher only knows this interface. Delivery transports
(push, email, in-app) live outside this service and plug in here.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime

logger = logging.getLogger(__name__)


class NotificationGateway(ABC):
    """Delivers one event reminder to one attendee."""

    @abstractmethod
    def send_event_reminder(
        self, attendee_id: str, event_id: str, event_title: str, start_time: datetime
    ) -> bool:
        """Send the reminder. Returns True on success, False on a delivery failure.

        Implementations may also raise; the dispatcher treats that as a failure.
        """
        ...


class LoggingNotificationGateway(NotificationGateway):
    """Gateway that only logs reminders. Used until a real transport is wired in."""

    def send_event_reminder(
        self, attendee_id: str, event_id: str, event_title: str, start_time: datetime
    ) -> bool:
        logger.info(
            f"[REMINDER] -> attendee={attendee_id}, event='{event_title}' ({event_id}) "
            f"at {start_time.isoformat()}"
        )
        return True
