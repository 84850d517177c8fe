"""Event RSVP ledger and reminder dispatcher."""

__version__ = "1.0.0"
