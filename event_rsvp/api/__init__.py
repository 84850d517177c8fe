"""HTTP API for events and attendance."""
