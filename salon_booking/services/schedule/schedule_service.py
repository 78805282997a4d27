# ============================================================================
# salon_booking/services/schedule/schedule_service.py
# Weekly opening hours for providers and employees
# ============================================================================
from typing import Dict, List
from sqlalchemy.orm import Session
import logging

from salon_booking.models.availability import Availability, EmployeeAvailability
from salon_booking.models.employee import Employee
from salon_booking.models.provider import Provider
from salon_booking.schemas.appointment import DaySchedule
from salon_booking.utils.time_utils import minutes_to_time, parse_time_label

logger = logging.getLogger(__name__)

WEEKDAYS = {
    "sunday": 0,
    "monday": 1,
    "tuesday": 2,
    "wednesday": 3,
    "thursday": 4,
    "friday": 5,
    "saturday": 6,
}


class ScheduleService:
    """
    Schedules are saved as a whole week: existing rows are removed and one
    row is written per enabled day.
    """

    @staticmethod
    def replace_provider_availability(
            db: Session,
            provider_id: str,
            days: Dict[str, DaySchedule]
    ) -> List[Availability]:
        provider = db.query(Provider).filter(Provider.id == provider_id).first()
        if not provider:
            raise LookupError(f"Provider {provider_id} not found")

        parsed = ScheduleService._parse_week(days)

        db.query(Availability).filter(Availability.provider_id == provider_id).delete(synchronize_session=False)

        rows = [
            Availability(
                provider_id=provider_id,
                weekday=weekday,
                start_time=start,
                end_time=end,
                is_active=True,
            )
            for weekday, start, end in parsed
        ]
        db.add_all(rows)
        db.commit()

        logger.info(f"Saved {len(rows)} working days for provider {provider_id}")
        return rows

    @staticmethod
    def replace_employee_availability(
            db: Session,
            employee_id: str,
            days: Dict[str, DaySchedule]
    ) -> List[EmployeeAvailability]:
        employee = ScheduleService._get_employee(db, employee_id)

        parsed = ScheduleService._parse_week(days)

        db.query(EmployeeAvailability).filter(
            EmployeeAvailability.employee_id == employee.id
        ).delete(synchronize_session=False)

        rows = [
            EmployeeAvailability(
                employee_id=employee.id,
                day_of_week=weekday,
                start_time=start,
                end_time=end,
                is_available=True,
            )
            for weekday, start, end in parsed
        ]
        db.add_all(rows)
        db.commit()

        logger.info(f"Saved {len(rows)} working days for employee {employee_id}")
        return rows

    @staticmethod
    def set_employee_custom_schedule(db: Session, employee_id: str, enabled: bool) -> Employee:
        """Turning the custom schedule off drops the employee's own hours"""
        employee = ScheduleService._get_employee(db, employee_id)

        employee.custom_schedule_enabled = enabled
        if not enabled:
            db.query(EmployeeAvailability).filter(
                EmployeeAvailability.employee_id == employee.id
            ).delete(synchronize_session=False)

        db.commit()
        db.refresh(employee)

        logger.info(f"Custom schedule {'enabled' if enabled else 'disabled'} for employee {employee_id}")
        return employee

    @staticmethod
    def _get_employee(db: Session, employee_id: str) -> Employee:
        employee = db.query(Employee).filter(Employee.id == employee_id).first()
        if not employee:
            raise LookupError(f"Employee {employee_id} not found")
        return employee

    @staticmethod
    def _parse_week(days: Dict[str, DaySchedule]) -> list:
        parsed = []
        for name, day in days.items():
            weekday = WEEKDAYS.get(name.strip().lower())
            if weekday is None:
                raise ValueError(f"Invalid weekday: {name}")
            if not day.enabled:
                continue

            start = parse_time_label(day.start_time)
            end = parse_time_label(day.end_time)
            if end <= start:
                raise ValueError(f"End time must be after start time on {name}")

            parsed.append((weekday, minutes_to_time(start), minutes_to_time(end)))

        return sorted(parsed)
