"""Shared fixtures: in-memory SQLite session, seeded salon, recorded notifications."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["DEBUG"] = "false"

from datetime import date, time

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from salon_booking.models import (
    Appointment,
    Availability,
    Base,
    Employee,
    EmployeeAvailability,
    Provider,
    ProviderSettings,
    Service,
)
from salon_booking.services.notification.dispatcher import NotificationDispatcher

# 2026-01-19 is a Monday (weekday 1 with Sunday = 0)
MONDAY = date(2026, 1, 19)
SUNDAY = date(2026, 1, 18)

OWNER_USER = "owner-user"
CLIENT_USER = "client-user"
STYLIST_USER = "stylist-user"


@pytest.fixture
def db():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(autouse=True)
def sent_notifications(monkeypatch):
    """Record queued notifications instead of talking to the broker."""
    sent = []

    def record(appointment_id, event, recipient_user_ids):
        recipients = list(recipient_user_ids)
        if recipients:
            sent.append({"appointment_id": appointment_id, "event": event, "recipients": recipients})

    monkeypatch.setattr(NotificationDispatcher, "dispatch", staticmethod(record))
    return sent


@pytest.fixture
def salon(db):
    """Provider open Monday 09:00-12:00 with a 60 minute haircut."""
    provider = Provider(user_id=OWNER_USER, business_name="Studio Nine")
    db.add(provider)
    db.flush()

    service = Service(provider_id=provider.id, name="Haircut", duration_minutes=60)
    db.add(service)
    db.add(Availability(
        provider_id=provider.id,
        weekday=1,
        start_time=time(9, 0),
        end_time=time(12, 0),
        is_active=True,
    ))
    db.commit()
    return provider, service


@pytest.fixture
def stylist(db, salon):
    """Employee working the provider's hours until a custom schedule is enabled."""
    provider, _ = salon
    employee = Employee(provider_id=provider.id, user_id=STYLIST_USER, name="Ana")
    db.add(employee)
    db.commit()
    return employee


@pytest.fixture
def make_appointment(db, salon):
    """Insert an appointment row directly, bypassing validation."""
    provider, service = salon

    def _make(at="10:00", status="pending", on=MONDAY, duration=60, employee_id=None,
              client_id=CLIENT_USER, service_id=None):
        hours, minutes = (int(part) for part in at.split(":"))
        appointment = Appointment(
            client_id=client_id,
            provider_id=provider.id,
            service_id=service_id or service.id,
            employee_id=employee_id,
            appointment_date=on,
            appointment_time=time(hours, minutes),
            duration_minutes=duration,
            status=status,
        )
        db.add(appointment)
        db.commit()
        return appointment

    return _make


@pytest.fixture
def set_settings(db, salon):
    """Store scheduling settings for the salon's provider."""
    provider, _ = salon

    def _set(**values):
        row = db.query(ProviderSettings).filter(ProviderSettings.provider_id == provider.id).first()
        if not row:
            row = ProviderSettings(provider_id=provider.id)
            db.add(row)
        for key, value in values.items():
            setattr(row, key, value)
        db.commit()
        return row

    return _set


@pytest.fixture
def employee_hours(db):
    """Give an employee their own hours for a weekday."""

    def _add(employee, weekday=1, start=time(13, 0), end=time(15, 0)):
        db.add(EmployeeAvailability(
            employee_id=employee.id,
            day_of_week=weekday,
            start_time=start,
            end_time=end,
            is_available=True,
        ))
        employee.custom_schedule_enabled = True
        db.commit()

    return _add
