"""Logging configuration for the application."""

import logging
import sys

_configured = False


def setup_logging(level: int = logging.INFO):
    """Configure logging for the application.

    Safe to call more than once; only the first call installs the handler.
    """
    global _configured
    if _configured:
        return

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    # Set higher log levels for noisy components
    logging.getLogger('apscheduler').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

    loggers = [
        'event_rsvp.services.attendance_ledger',
        'event_rsvp.services.reminder_dispatcher',
        'event_rsvp.services.notifications',
        'event_rsvp.scheduler',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        # Don't add handler here since it's already handled by root logger

    _configured = True
