"""Configuration package."""

from .environment import IS_PRODUCTION_ENVIRONMENT
from .reminders import ReminderConfig

__all__ = ['IS_PRODUCTION_ENVIRONMENT', 'ReminderConfig']
