"""
Tests for the HTTP layer.

Database access is replaced by monkeypatching the service-level query
functions, so these run without PostgreSQL.
"""

from datetime import UTC, date, datetime

import pytest
from fastapi.testclient import TestClient

from therapy_booking.api.deps import get_now, get_session
from therapy_booking.main import app
from therapy_booking.models.user import TherapistPublic
from therapy_booking.scheduling.types import Override
from therapy_booking.services import availability_service, booking_service

from .conftest import booked, general_day, make_schedule

NOW = datetime(2026, 10, 19, 8, 0, tzinfo=UTC)
SCHEDULE = make_schedule({1: general_day("09:00", "12:00", 60), 2: general_day("09:00", "12:00", 60)})


async def _no_session():
    yield None


@pytest.fixture
def state():
    return {"sessions": [], "overrides": [], "therapist": True, "credits": 1, "schedule": SCHEDULE, "now": NOW}


@pytest.fixture
def client(monkeypatch, state):
    async def load_weekly_schedule(session, therapist_id):
        return state["schedule"]

    async def list_overrides(session, therapist_id, start_date, end_date):
        return [o for o in state["overrides"] if start_date <= o.override_date <= end_date]

    async def get_override(session, therapist_id, target_date):
        matches = [o for o in state["overrides"] if o.override_date == target_date]
        return matches[-1] if matches else None

    async def list_booked_sessions(session, therapist_id, start, end, statuses, tz=None, exclude_session_id=None):
        return [s for s in state["sessions"] if s.id != exclude_session_id]

    async def get_bookable_therapist(session, therapist_id):
        if not state["therapist"]:
            return None
        return TherapistPublic(id=therapist_id, email="ada@example.com", full_name="Ada Okafor")

    async def count_available_credits(session, user_id):
        return state["credits"]

    monkeypatch.setattr(availability_service, "load_weekly_schedule", load_weekly_schedule)
    monkeypatch.setattr(availability_service, "list_overrides", list_overrides)
    monkeypatch.setattr(availability_service, "list_booked_sessions", list_booked_sessions)
    monkeypatch.setattr(booking_service, "load_weekly_schedule", load_weekly_schedule)
    monkeypatch.setattr(booking_service, "get_override", get_override)
    monkeypatch.setattr(booking_service, "list_booked_sessions", list_booked_sessions)
    monkeypatch.setattr(booking_service, "get_bookable_therapist", get_bookable_therapist)
    monkeypatch.setattr(booking_service, "count_available_credits", count_available_credits)

    app.dependency_overrides[get_session] = _no_session
    app.dependency_overrides[get_now] = lambda: state["now"]
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


class TestSlotsForDate:
    def test_lists_free_slots(self, client):
        response = client.get("/api/v1/availability/slots", params={"therapist_id": "t-1", "date": "2026-10-20"})

        assert response.status_code == 200
        body = response.json()
        assert body["total_slots"] == 3
        assert body["slots"][0]["id"] == "2026-10-20-09:00"
        assert body["slots"][0]["start_time"] == "09:00"
        assert body["slots"][0]["end_time"] == "10:00"
        assert body["slots"][0]["day_of_week"] == 2
        assert "no-store" in response.headers["cache-control"]

    def test_booked_slot_is_hidden(self, client, state):
        state["sessions"] = [booked(datetime(2026, 10, 20, 10), datetime(2026, 10, 20, 11))]

        response = client.get("/api/v1/availability/slots", params={"therapist_id": "t-1", "date": "2026-10-20"})

        assert [s["start_time"] for s in response.json()["slots"]] == ["09:00", "11:00"]

    def test_include_booked_marks_slot(self, client, state):
        state["sessions"] = [booked(datetime(2026, 10, 20, 10), datetime(2026, 10, 20, 11))]

        response = client.get(
            "/api/v1/availability/slots",
            params={"therapist_id": "t-1", "date": "2026-10-20", "include_booked": "true"},
        )

        statuses = [s["booking_status"] for s in response.json()["slots"]]
        assert statuses == ["available", "booked", "available"]

    def test_blocked_date_has_no_slots(self, client, state):
        state["overrides"] = [Override(override_date=date(2026, 10, 20), is_available=False)]

        response = client.get("/api/v1/availability/slots", params={"therapist_id": "t-1", "date": "2026-10-20"})

        body = response.json()
        assert body["slots"] == []
        assert body["message"] == "No available slots for this date"

    def test_invalid_date_rejected(self, client):
        response = client.get("/api/v1/availability/slots", params={"therapist_id": "t-1", "date": "20-10-2026"})

        assert response.status_code == 422


class TestSlotsForRange:
    def test_range_starts_today(self, client):
        response = client.get("/api/v1/availability", params={"therapist_id": "t-1", "days_ahead": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["start_date"] == "2026-10-19"
        assert [(s["date"], s["start_time"]) for s in body["availability"]] == [
            ("2026-10-19", "09:00"),
            ("2026-10-19", "10:00"),
            ("2026-10-19", "11:00"),
            ("2026-10-20", "09:00"),
            ("2026-10-20", "10:00"),
            ("2026-10-20", "11:00"),
        ]

    def test_range_starts_on_therapist_local_date(self, client, state):
        # 20:00 UTC on the 19th is already 05:00 on the 20th in Tokyo
        state["schedule"] = make_schedule({i: general_day("09:00", "12:00", 60) for i in range(7)}, timezone="Asia/Tokyo")
        state["now"] = datetime(2026, 10, 19, 20, 0, tzinfo=UTC)

        response = client.get("/api/v1/availability", params={"therapist_id": "t-1", "days_ahead": 2})

        body = response.json()
        assert body["start_date"] == "2026-10-20"
        assert sorted({s["date"] for s in body["availability"]}) == ["2026-10-20", "2026-10-21"]
        assert len(body["availability"]) == 6

    def test_range_stops_at_booking_horizon(self, client, state):
        state["schedule"] = make_schedule({i: general_day("09:00", "10:00", 60) for i in range(7)})

        # horizon is 30 days from 2026-10-19, so 2026-11-18 is the last bookable date
        response = client.get(
            "/api/v1/availability",
            params={"therapist_id": "t-1", "days_ahead": 7, "start_date": "2026-11-17"},
        )

        assert [s["date"] for s in response.json()["availability"]] == ["2026-11-17", "2026-11-18"]

    def test_range_beyond_horizon_is_empty(self, client, state):
        state["schedule"] = make_schedule({i: general_day("09:00", "10:00", 60) for i in range(7)})

        response = client.get(
            "/api/v1/availability",
            params={"therapist_id": "t-1", "days_ahead": 7, "start_date": "2026-11-30"},
        )

        body = response.json()
        assert body["start_date"] == "2026-11-30"
        assert body["availability"] == []

    def test_days_ahead_is_bounded(self, client):
        response = client.get("/api/v1/availability", params={"therapist_id": "t-1", "days_ahead": 365})

        assert response.status_code == 422


class TestCheckAvailability:
    def test_free_window(self, client):
        response = client.post(
            "/api/v1/availability/check",
            json={"therapist_id": "t-1", "start_time": "2026-10-20T10:00:00", "duration_minutes": 60},
        )

        assert response.status_code == 200
        assert response.json() == {"available": True, "conflicting_sessions": [], "suggested_times": []}

    def test_conflict_with_suggestions(self, client, state):
        state["sessions"] = [booked(datetime(2026, 10, 20, 10), datetime(2026, 10, 20, 11))]

        response = client.post(
            "/api/v1/availability/check",
            json={"therapist_id": "t-1", "start_time": "2026-10-20T10:00:00", "duration_minutes": 60},
        )

        body = response.json()
        assert body["available"] is False
        assert [c["id"] for c in body["conflicting_sessions"]] == ["s-1"]
        assert [s["label"] for s in body["suggested_times"]] == [
            "1 hour later (11:00)",
            "Same time tomorrow (10:00)",
        ]

    def test_excluded_session_is_ignored(self, client, state):
        state["sessions"] = [booked(datetime(2026, 10, 20, 10), datetime(2026, 10, 20, 11))]

        response = client.post(
            "/api/v1/availability/check",
            json={
                "therapist_id": "t-1",
                "start_time": "2026-10-20T10:00:00",
                "duration_minutes": 60,
                "exclude_session_id": "s-1",
            },
        )

        assert response.json()["available"] is True


class TestValidateBooking:
    def _post(self, client, **overrides):
        body = {
            "therapist_id": "t-1",
            "session_date": "2026-10-20",
            "start_time": "10:00",
            "duration_minutes": 60,
            "user_id": "u-1",
        }
        body.update(overrides)
        return client.post("/api/v1/bookings/validate", json=body)

    def test_valid_booking(self, client):
        response = self._post(client)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["session_date"] == "2026-10-20"
        assert body["start_time"] == "2026-10-20T10:00:00"
        assert body["end_time"] == "2026-10-20T11:00:00"
        assert body["available_credits"] == 1

    def test_malformed_date_is_bad_request(self, client):
        response = self._post(client, session_date="2026/10/20")

        assert response.status_code == 400
        assert response.json()["error_type"] == "validation_error"

    def test_past_date_is_bad_request(self, client):
        response = self._post(client, session_date="2026-10-18")

        assert response.status_code == 400
        assert "past" in response.json()["detail"]

    def test_unknown_therapist_is_not_found(self, client, state):
        state["therapist"] = False

        response = self._post(client)

        assert response.status_code == 404
        assert response.json()["error_type"] == "not_found"

    def test_blocked_date_is_conflict(self, client, state):
        state["overrides"] = [Override(override_date=date(2026, 10, 20), is_available=False, reason="Holiday")]

        response = self._post(client)

        assert response.status_code == 409
        assert response.json()["reason"] == "Holiday"

    def test_overlap_is_conflict(self, client, state):
        state["sessions"] = [booked(datetime(2026, 10, 20, 10, 30), datetime(2026, 10, 20, 11))]

        response = self._post(client)

        assert response.status_code == 409
        body = response.json()
        assert body["error_type"] == "conflict"
        assert body["conflicts"][0]["start_time"] == "2026-10-20T10:30:00"

    def test_no_credits_is_payment_required(self, client, state):
        state["credits"] = 0

        response = self._post(client)

        assert response.status_code == 402
        assert response.json()["redirect_to"] == "/dashboard/continue-journey"
