"""Routes package initialization."""

from . import (
    attendance,
    events,
    health
)

__all__ = [
    'attendance',
    'events',
    'health'
]
