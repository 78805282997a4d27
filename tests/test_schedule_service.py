"""Tests for weekly schedule management."""

from datetime import time

import pytest

from salon_booking.models import Availability, EmployeeAvailability
from salon_booking.schemas.appointment import DaySchedule
from salon_booking.services.schedule.schedule_service import ScheduleService


class TestProviderSchedule:
    """Tests for ScheduleService.replace_provider_availability()."""

    def test_replaces_whole_week(self, db, salon):
        """Should drop old rows and write one per enabled day."""
        provider, _ = salon

        rows = ScheduleService.replace_provider_availability(db, provider.id, {
            "tuesday": DaySchedule(enabled=True, start_time="10:00", end_time="18:00"),
            "saturday": DaySchedule(enabled=True, start_time="09:00", end_time="13:00"),
            "sunday": DaySchedule(enabled=False),
        })

        assert [row.weekday for row in rows] == [2, 6]
        stored = db.query(Availability).filter(Availability.provider_id == provider.id).all()
        assert sorted(row.weekday for row in stored) == [2, 6]
        tuesday = next(row for row in stored if row.weekday == 2)
        assert tuesday.start_time == time(10, 0)

    def test_end_before_start(self, db, salon):
        """Should reject a day that ends before it starts and keep the old week."""
        provider, _ = salon
        with pytest.raises(ValueError):
            ScheduleService.replace_provider_availability(db, provider.id, {
                "monday": DaySchedule(enabled=True, start_time="18:00", end_time="09:00"),
            })
        assert db.query(Availability).count() == 1

    def test_unknown_weekday(self, db, salon):
        """Should reject names that are not weekdays."""
        provider, _ = salon
        with pytest.raises(ValueError):
            ScheduleService.replace_provider_availability(db, provider.id, {"funday": DaySchedule()})

    def test_unknown_provider(self, db):
        """Should raise LookupError for a missing provider."""
        with pytest.raises(LookupError):
            ScheduleService.replace_provider_availability(db, "missing", {})


class TestEmployeeSchedule:
    """Tests for employee hours and the custom schedule switch."""

    def test_replace_employee_hours(self, db, salon, stylist):
        """Should store the employee's enabled days."""
        rows = ScheduleService.replace_employee_availability(db, stylist.id, {
            "Monday": DaySchedule(enabled=True, start_time="13:00", end_time="17:00"),
        })
        assert [row.day_of_week for row in rows] == [1]

    def test_disabling_custom_schedule_clears_hours(self, db, salon, stylist, employee_hours):
        """Should remove the employee's own rows when switched off."""
        employee_hours(stylist)

        employee = ScheduleService.set_employee_custom_schedule(db, stylist.id, False)

        assert employee.custom_schedule_enabled is False
        assert db.query(EmployeeAvailability).count() == 0

    def test_enabling_custom_schedule(self, db, salon, stylist):
        """Should switch the employee to their own hours."""
        employee = ScheduleService.set_employee_custom_schedule(db, stylist.id, True)
        assert employee.custom_schedule_enabled is True

    def test_unknown_employee(self, db):
        """Should raise LookupError for a missing employee."""
        with pytest.raises(LookupError):
            ScheduleService.set_employee_custom_schedule(db, "missing", True)
