"""Core database functionality and configuration.

This module provides the engine, connection pooling and session handling
used by the event store.
"""

from contextlib import contextmanager
import logging
import threading
from pathlib import Path
from typing import Optional, Dict, Any, Generator
import os

from sqlalchemy import create_engine, event, Engine, inspect
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import scoped_session, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..models import Base
from ..models.event import Event  # noqa
from ..models.attendance import Attendance  # noqa
from ..config.environment import IS_PRODUCTION_ENVIRONMENT

logger = logging.getLogger(__name__)


class DatabaseConfig:
    """Database configuration settings."""

    def __init__(
        self,
        url: Optional[str] = None,
        sqlite_path: Optional[Path] = None,
        postgres_url: Optional[str] = None,
        echo: bool = False,
        pool_size: int = 3,
        max_overflow: int = 4,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True,
        sqlite_busy_timeout: float = 30.0
    ):
        """
        Initialize database configuration.

        In production environment, DATABASE_URL must be set in environment variables
        or provided explicitly via postgres_url parameter.

        Args:
            url: Explicit SQLAlchemy URL, overrides the environment-based choice
                 (tests pass "sqlite://" for an in-memory database)
            sqlite_path: Path to SQLite database file (for development)
            postgres_url: PostgreSQL connection URL (for production)
                        If not provided, will use DATABASE_URL env variable
            echo: Whether to echo SQL statements
            pool_size: Size of the connection pool (permanent connections)
            max_overflow: Maximum number of extra connections to allow temporarily
            pool_timeout: Seconds to wait for an available connection
            pool_recycle: Seconds before connections are recycled (prevent stale)
            pool_pre_ping: Whether to ping connections before using them
            sqlite_busy_timeout: Seconds a SQLite file connection waits for a lock

        Raises:
            ValueError: If in production environment and no database URL is provided
                      either via postgres_url parameter or DATABASE_URL env variable
        """
        self.url = url
        self.postgres_url = None
        self.sqlite_path = None

        if url:
            pass
        elif IS_PRODUCTION_ENVIRONMENT:
            self.postgres_url = postgres_url or os.environ.get('DATABASE_URL')
            if not self.postgres_url:
                raise ValueError(
                    "Database URL must be provided either via postgres_url parameter "
                    "or DATABASE_URL environment variable when in production environment"
                )
        else:
            self.sqlite_path = sqlite_path or Path(__file__).parent.parent.parent / 'data' / 'events.db'

        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.pool_recycle = pool_recycle
        self.pool_pre_ping = pool_pre_ping
        self.sqlite_busy_timeout = sqlite_busy_timeout

    @property
    def connection_url(self) -> str:
        """Get the database connection URL based on configuration."""
        if self.url:
            return self.url
        if self.sqlite_path:
            return f"sqlite:///{self.sqlite_path}"
        if not self.postgres_url:
            raise ValueError("PostgreSQL URL not configured")
        return self.postgres_url

    @property
    def is_sqlite(self) -> bool:
        return self.connection_url.startswith('sqlite')

    @property
    def is_sqlite_memory(self) -> bool:
        """Whether the URL points at an in-memory SQLite database."""
        if not self.is_sqlite:
            return False
        url = make_url(self.connection_url)
        return url.database in (None, '', ':memory:') or url.query.get('mode') == 'memory'

    def get_engine_args(self) -> Dict[str, Any]:
        """Get SQLAlchemy engine arguments based on configuration.

        An in-memory SQLite database exists only inside its one connection, so
        it is shared through StaticPool. A SQLite file gets a pool of real
        connections, one per thread at a time, and waits on the file lock for
        up to sqlite_busy_timeout seconds before raising "database is locked".
        """
        args: Dict[str, Any] = {"echo": self.echo}

        if self.is_sqlite_memory:
            args["connect_args"] = {"check_same_thread": False}
            args["poolclass"] = StaticPool
        elif self.is_sqlite:
            args["connect_args"] = {
                "check_same_thread": False,
                "timeout": self.sqlite_busy_timeout,
            }
            args.update({
                "pool_size": self.pool_size,
                "max_overflow": self.max_overflow,
                "pool_timeout": self.pool_timeout,
            })
        else:
            args.update({
                "pool_size": self.pool_size,
                "max_overflow": self.max_overflow,
                "pool_timeout": self.pool_timeout,
                "pool_recycle": self.pool_recycle,
                "pool_pre_ping": self.pool_pre_ping
            })

        return args


class DatabaseError(Exception):
    """Base exception for database-related errors."""
    pass


class ConnectionError(DatabaseError):
    """Raised when there are issues connecting to the database."""
    pass


class SessionError(DatabaseError):
    """Raised when there are issues with database sessions."""
    pass


class UniqueViolationError(DatabaseError):
    """Raised when an insert collides with a uniqueness constraint."""
    pass


class RecordNotFoundError(DatabaseError):
    """Raised when a row that a write depends on is missing."""
    pass


class CounterUnderflowError(DatabaseError):
    """Raised when a counter decrement would go below zero."""
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Database engine and session management."""

    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DatabaseConfig()
        self.engine: Optional[Engine] = None
        self._tables_checked = False
        self._schema_lock = threading.Lock()
        self._session_factory = sessionmaker()
        self._scoped_session = scoped_session(self._session_factory)

        self._setup_engine()

    def _setup_engine(self) -> None:
        """Set up the SQLAlchemy engine."""
        try:
            self.engine = create_engine(
                self.config.connection_url,
                **self.config.get_engine_args()
            )
            if self.config.is_sqlite:
                # SQLite ignores ON DELETE CASCADE unless asked per connection
                event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
            self._session_factory.configure(bind=self.engine)
        except Exception as e:
            raise ConnectionError(f"Failed to create database engine: {e}") from e

    def init_db(self) -> None:
        """Initialize the database schema."""
        if not self.engine:
            raise ConnectionError("Database engine not initialized")

        if self.config.sqlite_path:
            Path(self.config.sqlite_path).parent.mkdir(parents=True, exist_ok=True)

        try:
            Base.metadata.create_all(self.engine)
            self._tables_checked = True
            logger.info("Database schema initialized successfully")
        except Exception as e:
            raise DatabaseError(f"Failed to initialize database schema: {e}") from e

    def ensure_tables_exist(self) -> None:
        """Ensure all required database tables exist."""
        if self._tables_checked:
            return
        if not self.engine:
            raise ConnectionError("Database engine not initialized")

        if self.config.sqlite_path:
            Path(self.config.sqlite_path).parent.mkdir(parents=True, exist_ok=True)

        # First requests may arrive on several threads at once
        with self._schema_lock:
            if self._tables_checked:
                return
            try:
                inspector = inspect(self.engine)
                existing_tables = inspector.get_table_names()
                required_tables = Base.metadata.tables.keys()

                if not all(table in existing_tables for table in required_tables):
                    logger.info("Some tables missing, initializing database schema")
                    Base.metadata.create_all(self.engine)
                    logger.info("Database schema initialized successfully")

                self._tables_checked = True

            except Exception as e:
                raise DatabaseError(f"Failed to verify/create database schema: {e}") from e

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around a series of operations.

        Everything done inside the block commits together or not at all.

        Example:
            with db.session() as session:
                event = session.get(Event, event_id)
                event.title = "New title"
                # No need to call commit - it's handled automatically

        Raises:
            DatabaseError: Subclasses raised inside the block pass through unchanged
            OperationalError: Transient driver errors pass through so callers can retry
            SessionError: For any other error inside the block or on commit
        """
        self.ensure_tables_exist()

        session = self._scoped_session()
        try:
            yield session
            session.commit()
        except (DatabaseError, OperationalError):
            session.rollback()
            raise
        except Exception as e:
            session.rollback()
            raise SessionError(f"Database session error: {e}") from e
        finally:
            session.close()
            self._scoped_session.remove()

    def dispose(self) -> None:
        """Release pooled connections."""
        if self.engine:
            self.engine.dispose()


# Create the global database instance with default configuration
db = Database()
