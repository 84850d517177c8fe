"""FastAPI application configuration module."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Internal imports
from ..config.environment import IS_PRODUCTION_ENVIRONMENT # Environment must be imported first
from ..config.cors import CORS_CONFIG
from ..config.reminders import ReminderConfig
from ..db import Database
from ..scheduler import ReminderScheduler
from ..services import (
    AttendanceLedger,
    EventService,
    LoggingNotificationGateway,
    NotificationGateway,
    ReminderDispatcher,
)
from ..stores import SqlAlchemyEventStore
from ..utils.logging_config import setup_logging
from ..utils.timezone import now_utc
from .errors import register_error_handlers
from .routes import attendance, events, health

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    try:
        app.state.database.ensure_tables_exist()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise

    scheduler: Optional[ReminderScheduler] = app.state.reminder_scheduler
    if scheduler is not None:
        scheduler.start()

    yield

    # Shutdown
    if scheduler is not None:
        scheduler.shutdown(wait=True)


def create_application(
    database: Optional[Database] = None,
    gateway: Optional[NotificationGateway] = None,
    reminder_config: Optional[ReminderConfig] = None,
    clock: Callable[[], datetime] = now_utc,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        database: Database to use; defaults to the environment-configured one
        gateway: Notification gateway for reminders; defaults to logging only
        reminder_config: Reminder settings; defaults to the environment
        clock: Source of the current UTC time
    """
    if database is None:
        from ..db import db as database

    reminder_config = reminder_config or ReminderConfig()
    store = SqlAlchemyEventStore(database)

    app = FastAPI(
        title="Event RSVP API",
        description="Event attendance ledger and reminder dispatch",
        version="1.0.0",
        docs_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/docs',
        redoc_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/redoc',
        lifespan=lifespan
    )

    app.state.database = database
    app.state.event_service = EventService(store, clock=clock)
    app.state.attendance_ledger = AttendanceLedger(store, clock=clock)
    app.state.reminder_scheduler = None
    if reminder_config.scheduler_enabled:
        dispatcher = ReminderDispatcher(
            store,
            gateway or LoggingNotificationGateway(),
            config=reminder_config,
            clock=clock,
        )
        app.state.reminder_scheduler = ReminderScheduler(dispatcher, reminder_config)

    # Configure CORS
    app.add_middleware(CORSMiddleware, **CORS_CONFIG)

    register_error_handlers(app)

    # Include health check router without prefix
    app.include_router(health.router)

    # Include routers with prefix
    app.include_router(events.router, prefix="/api")
    app.include_router(attendance.router, prefix="/api")

    return app


# Create the application instance
app = create_application()
