"""Tests for slot generation."""

from datetime import time

import pytest
from sqlalchemy.exc import OperationalError

from salon_booking.models import Availability
from salon_booking.schemas.scheduling import build_scope
from salon_booking.services.appointment.ledger_reader import BookingLedgerReader
from salon_booking.services.availability.slot_generator import SlotGenerationError, SlotGenerator
from salon_booking.utils.time_utils import parse_time_label
from tests.conftest import MONDAY, SUNDAY


def _ledger_down(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("connection lost"))


class TestGenerateSlots:
    """Tests for SlotGenerator.generate_slots()."""

    def test_empty_day(self, db, salon):
        """Should list every start whose service fits in the window."""
        provider, _ = salon
        slots = SlotGenerator.generate_slots(db, build_scope(provider.id), MONDAY, 60)
        assert slots == ["09:00", "09:30", "10:00", "10:30", "11:00"]

    def test_occupied_hour(self, db, salon, make_appointment):
        """Should drop starts overlapping a booking and keep the one touching its end."""
        provider, _ = salon
        make_appointment(at="10:00", duration=60)
        slots = SlotGenerator.generate_slots(db, build_scope(provider.id), MONDAY, 60)
        assert slots == ["09:00", "11:00"]

    def test_buffer_after(self, db, salon, make_appointment, set_settings):
        """Should keep buffer_after minutes free after a booking."""
        provider, _ = salon
        make_appointment(at="10:00", duration=60)
        set_settings(buffer_after_minutes=15)
        slots = SlotGenerator.generate_slots(db, build_scope(provider.id), MONDAY, 60)
        assert slots == ["09:00"]

    def test_closed_day(self, db, salon):
        """Should return an empty list when there is no window that day."""
        provider, _ = salon
        assert SlotGenerator.generate_slots(db, build_scope(provider.id), SUNDAY, 60) == []

    def test_rejects_non_positive_duration(self, db, salon):
        """Should raise ValueError for a zero duration."""
        provider, _ = salon
        with pytest.raises(ValueError):
            SlotGenerator.generate_slots(db, build_scope(provider.id), MONDAY, 0)

    def test_duration_longer_than_window(self, db, salon):
        """Should return nothing when the service cannot fit at all."""
        provider, _ = salon
        assert SlotGenerator.generate_slots(db, build_scope(provider.id), MONDAY, 240) == []

    def test_ledger_failure_raises(self, db, salon, monkeypatch):
        """Should raise SlotGenerationError rather than return partial results."""
        provider, _ = salon
        monkeypatch.setattr(BookingLedgerReader, "list_occupying", staticmethod(_ledger_down))
        with pytest.raises(SlotGenerationError):
            SlotGenerator.generate_slots(db, build_scope(provider.id), MONDAY, 60)

    def test_employee_custom_hours(self, db, salon, stylist, employee_hours):
        """Should walk the employee's own window."""
        provider, _ = salon
        employee_hours(stylist, start=time(13, 0), end=time(15, 0))
        slots = SlotGenerator.generate_slots(db, build_scope(provider.id, stylist.id), MONDAY, 60)
        assert slots == ["13:00", "13:30", "14:00"]

    def test_employee_only_blocked_by_own_bookings(self, db, salon, stylist, make_appointment):
        """Should ignore other employees' bookings in employee scope."""
        provider, _ = salon
        make_appointment(at="10:00")
        slots = SlotGenerator.generate_slots(db, build_scope(provider.id, stylist.id), MONDAY, 60)
        assert "10:00" in slots


class TestSlotProperties:
    """Properties every generated list must satisfy."""

    def test_idempotent(self, db, salon, make_appointment):
        """Should return the same list for the same inputs."""
        provider, _ = salon
        make_appointment(at="09:30", duration=30)
        scope = build_scope(provider.id)
        first = SlotGenerator.generate_slots(db, scope, MONDAY, 30)
        assert SlotGenerator.generate_slots(db, scope, MONDAY, 30) == first

    def test_slots_stay_inside_window_and_grid(self, db, salon):
        """Should start on the 30 minute grid and end by the window end."""
        provider, _ = salon
        db.add(Availability(
            provider_id=provider.id, weekday=2,
            start_time=time(8, 15), end_time=time(12, 0), is_active=True,
        ))
        db.commit()
        tuesday = MONDAY.replace(day=20)

        slots = SlotGenerator.generate_slots(db, build_scope(provider.id), tuesday, 45)

        assert slots
        for label in slots:
            start = parse_time_label(label)
            assert (start - parse_time_label("08:15")) % 30 == 0
            assert start + 45 <= parse_time_label("12:00")

    def test_never_overlaps_occupying(self, db, salon, make_appointment, set_settings):
        """Should never return a start that overlaps a buffered booking."""
        provider, _ = salon
        make_appointment(at="09:30", duration=30)
        make_appointment(at="11:00", duration=30)
        set_settings(buffer_before_minutes=10, buffer_after_minutes=10)

        slots = SlotGenerator.generate_slots(db, build_scope(provider.id), MONDAY, 30)

        blocked = [(570 - 10, 600 + 10), (660 - 10, 690 + 10)]
        for label in slots:
            start = parse_time_label(label)
            for b_start, b_end in blocked:
                assert not (start < b_end and start + 30 > b_start)

    def test_larger_buffers_never_add_slots(self, db, salon, make_appointment, set_settings):
        """Should return a subset when buffers grow."""
        provider, _ = salon
        make_appointment(at="10:00", duration=30)
        scope = build_scope(provider.id)

        previous = set(SlotGenerator.generate_slots(db, scope, MONDAY, 30))
        for buffer in (5, 15, 30, 60):
            set_settings(buffer_before_minutes=buffer, buffer_after_minutes=buffer)
            current = set(SlotGenerator.generate_slots(db, scope, MONDAY, 30))
            assert current <= previous
            previous = current

    def test_allow_overlaps_ignores_bookings(self, db, salon, make_appointment, set_settings):
        """Should match the empty-ledger result when overlaps are allowed."""
        provider, _ = salon
        make_appointment(at="10:00", duration=60)
        set_settings(allow_overlaps=True, buffer_after_minutes=30)
        slots = SlotGenerator.generate_slots(db, build_scope(provider.id), MONDAY, 60)
        assert slots == ["09:00", "09:30", "10:00", "10:30", "11:00"]


class TestListAvailableSlots:
    """Tests for SlotGenerator.list_available_slots()."""

    def test_uses_service_duration(self, db, salon):
        """Should size slots by the chosen service."""
        provider, service = salon
        slots = SlotGenerator.list_available_slots(db, provider.id, MONDAY, service_id=service.id)
        assert slots[-1] == "11:00"

    def test_default_duration_without_service(self, db, salon):
        """Should use 30 minutes when no service is given."""
        provider, _ = salon
        slots = SlotGenerator.list_available_slots(db, provider.id, MONDAY)
        assert slots[-1] == "11:30"

    def test_degrades_to_empty_on_failure(self, db, salon, monkeypatch):
        """Should log and return an empty list when the ledger read fails."""
        provider, service = salon
        monkeypatch.setattr(BookingLedgerReader, "list_occupying", staticmethod(_ledger_down))
        assert SlotGenerator.list_available_slots(db, provider.id, MONDAY, service_id=service.id) == []
