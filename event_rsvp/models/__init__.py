"""Models package initialization."""

from .base import Base
from .event import Event
from .attendance import Attendance

__all__ = ['Base', 'Event', 'Attendance']
