"""CORS configuration for the FastAPI application."""

import os

from .environment import IS_PRODUCTION_ENVIRONMENT

# Production origins come from a comma-separated CORS_ALLOWED_ORIGINS
_configured_origins = [
    origin.strip()
    for origin in os.environ.get('CORS_ALLOWED_ORIGINS', '').split(',')
    if origin.strip()
]

ALLOWED_ORIGINS = {
    False: ["*"],                 # Development - allow all
    True: _configured_origins,    # Production - restricted
}

ALLOWED_METHODS = [
    "GET",      # Event, attendee and feed reads
    "POST",     # Create events, join events
    "PUT",      # Organizer updates
    "DELETE",   # Delete events, leave events
    "OPTIONS"   # Required for CORS preflight
]

ALLOWED_HEADERS = [
    "Authorization",
    "Content-Type",
    "Accept",
    "X-User-Id",    # Caller identity set by the auth gateway
]

CORS_CONFIG = {
    "allow_origins": ALLOWED_ORIGINS[IS_PRODUCTION_ENVIRONMENT],
    "allow_credentials": True,
    "allow_methods": ALLOWED_METHODS,
    "allow_headers": ALLOWED_HEADERS,
    "expose_headers": [],
    "max_age": 3600,
}
