"""Tests for the v1 HTTP routes."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from salon_booking.config.database import get_db
from salon_booking.main import create_app
from tests.conftest import CLIENT_USER, OWNER_USER, STYLIST_USER


@pytest.fixture
def client(db):
    """Test client bound to the in-memory session."""
    app = create_app()

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _as(user_id):
    return {"X-User-ID": user_id}


class TestSlotRoutes:
    """Tests for GET /api/v1/providers/{id}/slots."""

    def test_list_slots(self, client, salon):
        """GET slots should return free HH:MM starts."""
        provider, service = salon
        response = client.get(
            f"/api/v1/providers/{provider.id}/slots",
            params={"date": "2026-01-19", "service_id": service.id},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["slots"] == ["09:00", "09:30", "10:00", "10:30", "11:00"]
        assert data["appointment_date"] == "2026-01-19"

    def test_any_employee(self, client, salon):
        """GET slots with employee_id=any should be provider-wide."""
        provider, _ = salon
        response = client.get(
            f"/api/v1/providers/{provider.id}/slots",
            params={"date": "2026-01-18", "employee_id": "any"},
        )
        assert response.status_code == 200
        assert response.json()["employee_id"] is None
        assert response.json()["slots"] == []


class TestAppointmentRoutes:
    """Tests for /api/v1/appointments."""

    def _create(self, client, salon, at="10:00", user=CLIENT_USER):
        provider, service = salon
        return client.post(
            "/api/v1/appointments",
            json={
                "provider_id": provider.id,
                "service_id": service.id,
                "appointment_date": "2026-01-19",
                "appointment_time": at,
            },
            headers=_as(user),
        )

    def test_create(self, client, salon):
        """POST /appointments should book a pending appointment for the caller."""
        response = self._create(client, salon)
        assert response.status_code == 201
        appointment = response.json()["appointment"]
        assert appointment["status"] == "pending"
        assert appointment["client_id"] == CLIENT_USER
        assert appointment["appointment_time"] == "10:00"

    def test_create_requires_identity(self, client, salon):
        """POST /appointments should 401 without X-User-ID."""
        provider, service = salon
        response = client.post("/api/v1/appointments", json={
            "provider_id": provider.id,
            "service_id": service.id,
            "appointment_date": "2026-01-19",
            "appointment_time": "10:00",
        })
        assert response.status_code == 401

    def test_create_conflict(self, client, salon):
        """POST /appointments should 409 on a taken slot."""
        self._create(client, salon)
        response = self._create(client, salon, at="10:30", user="other-client")
        assert response.status_code == 409
        assert response.json()["detail"]["reason"] == "conflict"

    def test_create_outside_hours(self, client, salon):
        """POST /appointments should 422 outside opening hours."""
        response = self._create(client, salon, at="08:00")
        assert response.status_code == 422
        assert response.json()["detail"]["reason"] == "provider_offline"

    def test_validate(self, client, salon, make_appointment):
        """POST /appointments/validate should report the verdict with 200."""
        provider, service = salon
        make_appointment(at="10:00")
        response = client.post("/api/v1/appointments/validate", json={
            "provider_id": provider.id,
            "service_id": service.id,
            "appointment_date": "2026-01-19",
            "appointment_time": "10:00",
        })
        assert response.status_code == 200
        assert response.json()["ok"] is False
        assert response.json()["reason"] == "conflict"

    def test_confirm(self, client, salon, make_appointment):
        """PATCH status should let the provider confirm."""
        appointment = make_appointment()
        response = client.patch(
            f"/api/v1/appointments/{appointment.id}/status",
            json={"status": "confirmed"},
            headers=_as(OWNER_USER),
        )
        assert response.status_code == 200
        assert response.json()["status"] == "confirmed"

    def test_illegal_transition(self, client, salon, make_appointment):
        """PATCH status should 409 for a transition the state machine forbids."""
        appointment = make_appointment(status="cancelled")
        response = client.patch(
            f"/api/v1/appointments/{appointment.id}/status",
            json={"status": "confirmed"},
            headers=_as(OWNER_USER),
        )
        assert response.status_code == 409

    def test_status_forbidden(self, client, salon, make_appointment):
        """PATCH status should 403 when the client tries to confirm."""
        appointment = make_appointment()
        response = client.patch(
            f"/api/v1/appointments/{appointment.id}/status",
            json={"status": "confirmed"},
            headers=_as(CLIENT_USER),
        )
        assert response.status_code == 403

    def test_status_not_found(self, client, salon):
        """PATCH status should 404 for an unknown appointment."""
        response = client.patch(
            "/api/v1/appointments/missing/status",
            json={"status": "confirmed"},
            headers=_as(OWNER_USER),
        )
        assert response.status_code == 404

    def test_status_store_failure(self, client, db, salon, make_appointment, monkeypatch):
        """PATCH status should 503 when the database rejects the commit."""
        appointment = make_appointment()

        def fail():
            raise OperationalError("COMMIT", {}, Exception("connection lost"))

        monkeypatch.setattr(db, "commit", fail)
        response = client.patch(
            f"/api/v1/appointments/{appointment.id}/status",
            json={"status": "confirmed"},
            headers=_as(OWNER_USER),
        )
        assert response.status_code == 503

    def test_status_rejects_pending(self, client, salon, make_appointment):
        """PATCH status should 422 when asked to go back to pending."""
        appointment = make_appointment(status="confirmed")
        response = client.patch(
            f"/api/v1/appointments/{appointment.id}/status",
            json={"status": "pending"},
            headers=_as(OWNER_USER),
        )
        assert response.status_code == 422

    def test_reschedule(self, client, db, salon, make_appointment):
        """POST reschedule should move the appointment and reset it to pending."""
        appointment = make_appointment(at="09:00", status="confirmed")
        response = client.post(
            f"/api/v1/appointments/{appointment.id}/reschedule",
            json={"appointment_date": "2026-01-19", "appointment_time": "11:00"},
            headers=_as(CLIENT_USER),
        )
        assert response.status_code == 200
        assert response.json()["appointment"]["status"] == "pending"
        db.refresh(appointment)
        assert appointment.appointment_time.strftime("%H:%M") == "11:00"


class TestProviderRoutes:
    """Tests for /api/v1/providers and /api/v1/employees."""

    def test_settings_roundtrip(self, client, salon):
        """PUT settings should clamp and GET should return the saved values."""
        provider, _ = salon
        response = client.put(
            f"/api/v1/providers/{provider.id}/settings",
            json={"buffer_after_minutes": 500, "allow_overlaps": True},
            headers=_as(OWNER_USER),
        )
        assert response.status_code == 200
        assert response.json()["buffer_after_minutes"] == 240

        fetched = client.get(f"/api/v1/providers/{provider.id}/settings").json()
        assert fetched["allow_overlaps"] is True

    def test_settings_owner_only(self, client, salon):
        """PUT settings should 403 for anyone but the owner."""
        provider, _ = salon
        response = client.put(
            f"/api/v1/providers/{provider.id}/settings",
            json={"buffer_after_minutes": 10},
            headers=_as(CLIENT_USER),
        )
        assert response.status_code == 403

    def test_replace_availability(self, client, salon):
        """PUT availability should replace the week."""
        provider, _ = salon
        response = client.put(
            f"/api/v1/providers/{provider.id}/availability",
            json={"days": {"sunday": {"enabled": True, "start_time": "10:00", "end_time": "14:00"}}},
            headers=_as(OWNER_USER),
        )
        assert response.status_code == 200
        assert response.json()["working_days"] == [0]

        slots = client.get(
            f"/api/v1/providers/{provider.id}/slots", params={"date": "2026-01-18"}
        ).json()["slots"]
        assert slots[0] == "10:00"

    def test_invalid_availability(self, client, salon):
        """PUT availability should 422 when a day ends before it starts."""
        provider, _ = salon
        response = client.put(
            f"/api/v1/providers/{provider.id}/availability",
            json={"days": {"monday": {"enabled": True, "start_time": "18:00", "end_time": "09:00"}}},
            headers=_as(OWNER_USER),
        )
        assert response.status_code == 422

    def test_expired_pending(self, client, salon, make_appointment):
        """GET expired-pending should list past pending appointments."""
        provider, _ = salon
        appointment = make_appointment(status="pending")
        response = client.get(
            f"/api/v1/providers/{provider.id}/appointments/expired-pending",
            params={"today": "2026-01-20"},
            headers=_as(OWNER_USER),
        )
        assert response.status_code == 200
        assert [a["id"] for a in response.json()] == [appointment.id]

    def test_employee_custom_schedule(self, client, db, salon, stylist):
        """PATCH custom-schedule should be allowed for the employee themself."""
        response = client.patch(
            f"/api/v1/employees/{stylist.id}/custom-schedule",
            json={"enabled": True},
            headers=_as(STYLIST_USER),
        )
        assert response.status_code == 200
        assert response.json()["custom_schedule_enabled"] is True

    def test_employee_hours_forbidden(self, client, salon, stylist):
        """PUT employee availability should 403 for unrelated users."""
        response = client.put(
            f"/api/v1/employees/{stylist.id}/availability",
            json={"days": {}},
            headers=_as(CLIENT_USER),
        )
        assert response.status_code == 403


class TestHealth:
    """Tests for the health endpoints."""

    def test_health(self, client):
        """GET /health should report healthy."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_detailed_health(self, client):
        """GET /health/detailed should check the database."""
        response = client.get("/health/detailed")
        assert response.json()["database"] == "healthy"
