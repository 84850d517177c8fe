"""Tests for the HTTP API.

Run with: pytest tests/test_api.py -v
"""

import pytest
from fastapi.testclient import TestClient

from event_rsvp.api.app import create_application

ORGANIZER = {"X-User-Id": "organizer-1"}
FAN = {"X-User-Id": "fan-1"}

EVENT_BODY = {
    "title": "Acoustic Session",
    "description": "Unplugged set streamed live",
    "category": "live_stream",
    "start_time": "2026-06-16T20:00:00Z",
    "stream_url": "https://stream.example.com/acoustic",
    "is_virtual": True,
}


@pytest.fixture
def client(database, reminder_config, clock):
    app = create_application(database=database, reminder_config=reminder_config, clock=clock)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def event_id(client):
    response = client.post("/api/events", json=EVENT_BODY, headers=ORGANIZER)
    assert response.status_code == 201
    return response.json()["id"]


class TestHealth:
    def test_health(self, client):
        response = client.get("/")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["reminder_scheduler"] == "stopped"


class TestEvents:
    def test_create_event(self, client):
        response = client.post("/api/events", json=EVENT_BODY, headers=ORGANIZER)

        assert response.status_code == 201
        body = response.json()
        assert body["organizer_id"] == "organizer-1"
        assert body["attendee_count"] == 0
        assert body["reminder_sent"] is False

    def test_create_requires_identity(self, client):
        response = client.post("/api/events", json=EVENT_BODY)
        assert response.status_code == 401

    def test_create_in_past(self, client):
        body = dict(EVENT_BODY, start_time="2026-06-15T11:00:00Z")

        response = client.post("/api/events", json=body, headers=ORGANIZER)

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_FAILURE"

    def test_create_with_invalid_body(self, client):
        body = dict(EVENT_BODY, category="karaoke")
        assert client.post("/api/events", json=body, headers=ORGANIZER).status_code == 422

    def test_get_unknown_event(self, client):
        response = client.get("/api/events/missing")

        assert response.status_code == 404
        assert response.json() == {"error": "NOT_FOUND", "detail": "Event not found"}

    def test_update_by_owner(self, client, event_id):
        response = client.put(f"/api/events/{event_id}", json={"title": "Encore"}, headers=ORGANIZER)

        assert response.status_code == 200
        assert response.json()["title"] == "Encore"

    def test_update_by_someone_else(self, client, event_id):
        response = client.put(f"/api/events/{event_id}", json={"title": "Mine now"}, headers=FAN)

        assert response.status_code == 403
        assert response.json()["error"] == "FORBIDDEN"

    def test_delete_event(self, client, event_id):
        assert client.delete(f"/api/events/{event_id}", headers=ORGANIZER).status_code == 204
        assert client.get(f"/api/events/{event_id}").status_code == 404

    def test_organizer_listing(self, client, event_id):
        response = client.get("/api/events/organizer/organizer-1", params={"limit": 500})

        body = response.json()
        assert [e["id"] for e in body["data"]] == [event_id]
        assert body["limit"] == 100

    def test_feed(self, client, event_id):
        response = client.get("/api/events/feed", params=[("followed", "organizer-1"), ("followed", "organizer-9")])

        body = response.json()
        assert [e["id"] for e in body["data"]] == [event_id]
        assert (body["total"], body["page"], body["limit"], body["total_pages"]) == (1, 1, 20, 1)

    def test_feed_following_nobody(self, client, event_id):
        body = client.get("/api/events/feed").json()
        assert body["data"] == []
        assert body["total"] == 0


class TestAttendance:
    def test_join_and_leave(self, client, event_id):
        response = client.post(f"/api/events/{event_id}/attendance", headers=FAN)
        assert response.status_code == 201
        assert response.json()["reminder_opt_in"] is True
        assert client.get(f"/api/events/{event_id}").json()["attendee_count"] == 1

        assert client.delete(f"/api/events/{event_id}/attendance", headers=FAN).status_code == 204
        assert client.get(f"/api/events/{event_id}").json()["attendee_count"] == 0

    def test_join_with_reminders_off(self, client, event_id):
        response = client.post(
            f"/api/events/{event_id}/attendance", json={"reminder_opt_in": False}, headers=FAN
        )
        assert response.json()["reminder_opt_in"] is False

    def test_double_join_is_conflict(self, client, event_id):
        client.post(f"/api/events/{event_id}/attendance", headers=FAN)

        response = client.post(f"/api/events/{event_id}/attendance", headers=FAN)

        assert response.status_code == 409
        assert response.json()["error"] == "CONFLICT"

    def test_leave_without_joining(self, client, event_id):
        response = client.delete(f"/api/events/{event_id}/attendance", headers=FAN)
        assert response.status_code == 404

    def test_join_unknown_event(self, client):
        assert client.post("/api/events/missing/attendance", headers=FAN).status_code == 404

    def test_leave_with_drifted_counter(self, client, event_id, force_attendee_count):
        client.post(f"/api/events/{event_id}/attendance", headers=FAN)
        force_attendee_count(event_id, 0)

        response = client.delete(f"/api/events/{event_id}/attendance", headers=FAN)

        assert response.status_code == 500
        assert response.json()["error"] == "INTERNAL_INCONSISTENCY"

    def test_attendee_listings(self, client, event_id):
        client.post(f"/api/events/{event_id}/attendance", headers=FAN)
        client.post(f"/api/events/{event_id}/attendance", headers={"X-User-Id": "fan-2"})

        attendees = client.get(f"/api/events/{event_id}/attendees").json()
        mine = client.get("/api/me/attendances", headers=FAN).json()

        assert attendees["total"] == 2
        assert [a["event_id"] for a in mine["data"]] == [event_id]
