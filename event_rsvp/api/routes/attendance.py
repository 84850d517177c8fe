"""Attendance router module: join, leave and attendee listings."""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Response

from ..dependencies import get_attendance_ledger, get_current_user_id
from ..schemas import AttendanceOut, AttendancePageOut, JoinRequest
from ...services import AttendanceLedger

router = APIRouter(tags=["attendance"])


@router.post("/events/{event_id}/attendance", response_model=AttendanceOut, status_code=201)
def join_event(
    event_id: str,
    body: Optional[JoinRequest] = Body(None),
    attendee_id: str = Depends(get_current_user_id),
    ledger: AttendanceLedger = Depends(get_attendance_ledger),
):
    """Join an upcoming event. Reminders are on unless the body opts out."""
    reminder_opt_in = body.reminder_opt_in if body is not None else True
    return ledger.join(event_id, attendee_id, reminder_opt_in=reminder_opt_in)


@router.delete("/events/{event_id}/attendance", status_code=204)
def leave_event(
    event_id: str,
    attendee_id: str = Depends(get_current_user_id),
    ledger: AttendanceLedger = Depends(get_attendance_ledger),
):
    """Leave an upcoming event."""
    ledger.leave(event_id, attendee_id)
    return Response(status_code=204)


@router.get("/events/{event_id}/attendees", response_model=AttendancePageOut)
def list_attendees(
    event_id: str,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    ledger: AttendanceLedger = Depends(get_attendance_ledger),
):
    """Get the attendees of an event in join order."""
    return AttendancePageOut.from_page(ledger.list_attendees(event_id, page, limit))


@router.get("/me/attendances", response_model=AttendancePageOut)
def list_my_attendances(
    page: Optional[int] = None,
    limit: Optional[int] = None,
    attendee_id: str = Depends(get_current_user_id),
    ledger: AttendanceLedger = Depends(get_attendance_ledger),
):
    """Get the events the caller has joined, most recent first."""
    return AttendancePageOut.from_page(ledger.list_attendances_for(attendee_id, page, limit))
