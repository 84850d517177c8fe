"""Environment configuration module.

This module MUST be imported before any other project modules that depend on environment variables.
It loads the .env file and sets up the environment configuration that will be used throughout the project,
both when running the FastAPI app and when running the reminder scripts.

Usage:
    from event_rsvp.config.environment import IS_PRODUCTION_ENVIRONMENT

Note:
    In production, environment variables should be set directly in the
    platform's environment configuration rather than through a .env file.
"""

import os
import logging
from dotenv import load_dotenv

# Load environment variables - this must happen before any other imports
load_dotenv()

env_setting = os.environ.get('ENVIRONMENT', '').lower()
IS_PRODUCTION_ENVIRONMENT = env_setting == 'production'

if env_setting not in ['development', 'production']:
    logging.warning(
        f"Environment setting '{env_setting}' is invalid or not specified. "
        "Expected 'development' or 'production'. Defaulting to development environment."
    )


def env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable ('true', '1', 'yes' are truthy)."""
    value = os.environ.get(name)
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in ('true', '1', 'yes')


def env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to the default."""
    value = os.environ.get(name)
    if value is None or value.strip() == '':
        return default
    try:
        return int(value)
    except ValueError:
        logging.warning(f"Environment variable {name}={value!r} is not an integer, using {default}")
        return default


__all__ = ['IS_PRODUCTION_ENVIRONMENT', 'env_flag', 'env_int']
