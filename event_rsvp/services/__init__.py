"""Business services."""

from .attendance_ledger import AttendanceLedger
from .event_service import EventService
from .notifications import LoggingNotificationGateway, NotificationGateway
from .reminder_dispatcher import DispatchReport, ReminderDispatcher
from .reminder_window import reminder_window, select_events_due_for_reminder

__all__ = [
    'AttendanceLedger',
    'EventService',
    'NotificationGateway',
    'LoggingNotificationGateway',
    'ReminderDispatcher',
    'DispatchReport',
    'reminder_window',
    'select_events_due_for_reminder',
]
