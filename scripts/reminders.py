#!/usr/bin/env python3

"""
Command-line interface for the event reminder dispatcher.

This script handles:
- Creating the database schema
- Running a single reminder dispatch (e.g. from an external cron)
- Running the reminder scheduler in the foreground, without the HTTP API

Only one scheduler may run against a database at a time. The dispatcher's
run lock is per process, so running `serve` twice (or `serve` next to an API
process with REMINDER_SCHEDULER_ENABLED=true) can send duplicate reminders.

For usage information, run:
    python scripts/reminders.py --help

Common use cases:
    # Create tables
    python scripts/reminders.py init-db

    # Dispatch whatever is due right now and exit
    python scripts/reminders.py run-once

    # Keep dispatching every 5 minutes until interrupted
    python scripts/reminders.py serve --interval 5
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

# Add project root to Python path
sys.path.append(str(Path(__file__).parent.parent))

from event_rsvp.config.environment import IS_PRODUCTION_ENVIRONMENT  # noqa: F401  (loads .env first)
from event_rsvp.config.reminders import ReminderConfig
from event_rsvp.db import db
from event_rsvp.scheduler import ReminderScheduler
from event_rsvp.services import LoggingNotificationGateway, ReminderDispatcher
from event_rsvp.stores import SqlAlchemyEventStore
from event_rsvp.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_dispatcher(config: ReminderConfig) -> ReminderDispatcher:
    """Wire the dispatcher to the configured database and the logging gateway."""
    store = SqlAlchemyEventStore(db)
    return ReminderDispatcher(store, LoggingNotificationGateway(), config=config)


def cmd_init_db(args: argparse.Namespace) -> int:
    db.init_db()
    return 0


def cmd_run_once(args: argparse.Namespace) -> int:
    dispatcher = build_dispatcher(args.reminder_config)
    try:
        report = dispatcher.run_once()
    finally:
        dispatcher.close()

    if report is None:
        return 0

    logger.info(
        f"Selected {len(report.selected)} event(s), marked {len(report.marked_sent)}, "
        f"failed {len(report.failed)}; {report.notifications_sent} notification(s) sent, "
        f"{report.notifications_failed} failed"
    )
    return 1 if report.selection_failed or report.failed else 0


def cmd_serve(args: argparse.Namespace) -> int:
    config = args.reminder_config
    scheduler = ReminderScheduler(build_dispatcher(config), config)
    scheduler.start()
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Interrupted, waiting for the current run to finish")
    finally:
        scheduler.shutdown(wait=True)
    return 0


def load_reminder_config(args: argparse.Namespace) -> ReminderConfig:
    """Environment settings with command-line overrides applied.

    Raises:
        ValueError: If the resulting settings are out of range
    """
    config = ReminderConfig()
    if getattr(args, 'interval', None) is not None:
        config.interval_minutes = args.interval
    config.validate()
    return config


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Event reminder dispatcher")
    parser.add_argument('--debug', action='store_true', help="Enable debug logging")
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('init-db', help="Create database tables").set_defaults(func=cmd_init_db)
    subparsers.add_parser('run-once', help="Dispatch due reminders once and exit").set_defaults(func=cmd_run_once)

    serve_parser = subparsers.add_parser('serve', help="Dispatch reminders on a fixed interval")
    serve_parser.add_argument('--interval', type=int, help="Minutes between runs (default from REMINDER_INTERVAL_MINUTES)")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if args.func is not cmd_init_db:
        try:
            args.reminder_config = load_reminder_config(args)
        except ValueError as e:
            parser.error(str(e))

    setup_logging(logging.DEBUG if args.debug else logging.INFO)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
