"""Health check routes for the FastAPI application."""

from fastapi import APIRouter, Request

from ... import __version__
from ...config.environment import IS_PRODUCTION_ENVIRONMENT

router = APIRouter(tags=["health"])


@router.get("/")
async def health_check(request: Request):
    """Health check endpoint."""
    scheduler = getattr(request.app.state, "reminder_scheduler", None)
    return {
        "status": "healthy",
        "environment": "production" if IS_PRODUCTION_ENVIRONMENT else "development",
        "version": __version__,
        "reminder_scheduler": "running" if scheduler and scheduler.is_running else "stopped",
    }
