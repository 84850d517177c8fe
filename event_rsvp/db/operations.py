"""Retry support for store writes.

A store write is one transaction that either commits or is rolled back by
Database.session(), so a retried write is never applied twice.
"""

import logging
import time
from functools import wraps
from typing import Any, Callable, Tuple, Type, TypeVar

from sqlalchemy.exc import OperationalError

logger = logging.getLogger(__name__)

T = TypeVar('T')


def with_retry(
    max_attempts: int = 3,
    delay: float = 0.1,
    backoff: float = 2,
    exceptions: Tuple[Type[BaseException], ...] = (OperationalError,)
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Retry a store write on transient driver errors.

    OperationalError covers dropped PostgreSQL connections and SQLite's
    "database is locked" once the busy timeout runs out. Domain-level
    database errors (unique violation, missing record, counter underflow)
    are not transient and propagate on the first attempt.

    Args:
        max_attempts: Total number of attempts, including the first
        delay: Seconds to wait before the first retry
        backoff: Multiplier applied to the delay after each retry
        exceptions: Exception types that trigger a retry
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        name = func.__qualname__

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            current_delay = delay
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt == max_attempts:
                        logger.error(f"{name} failed after {attempt} attempts: {e}")
                        raise
                    logger.warning(
                        f"{name} attempt {attempt}/{max_attempts} failed: {e}. "
                        f"Retrying in {current_delay}s"
                    )
                    time.sleep(current_delay)
                    current_delay *= backoff

        return wrapper
    return decorator
