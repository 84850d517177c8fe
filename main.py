"""Main application entry point."""

from event_rsvp.config.environment import IS_PRODUCTION_ENVIRONMENT

if __name__ == "__main__":
    import uvicorn

    if not IS_PRODUCTION_ENVIRONMENT:
        # Development mode - use direct app instance for better debugging
        from event_rsvp.api.app import app
        uvicorn.run(
            app,
            host="0.0.0.0",
            port=8000,
            log_level="debug"
        )
    else:
        # Production mode runs one worker: the reminder scheduler lives in
        # this process and must not be started more than once
        uvicorn.run(
            "event_rsvp.api.app:app",
            host="0.0.0.0",
            port=8000,
            reload=False,
            workers=1,
            log_level="info",
            proxy_headers=True,
            forwarded_allow_ips="*"
        )
