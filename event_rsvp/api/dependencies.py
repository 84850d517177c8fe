"""FastAPI dependencies: services from app state and the caller's identity."""

from fastapi import Header, HTTPException, Request

from ..services import AttendanceLedger, EventService


def get_event_service(request: Request) -> EventService:
    return request.app.state.event_service


def get_attendance_ledger(request: Request) -> AttendanceLedger:
    return request.app.state.attendance_ledger


def get_current_user_id(x_user_id: str = Header(None, alias="X-User-Id")) -> str:
    """Identity of the caller, set by the authentication gateway in front of the API."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id.strip()
