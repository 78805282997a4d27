# ===== salon_booking/services/availability/availability_source.py =====
from typing import Optional
from sqlalchemy.orm import Session
import logging

from salon_booking.models.availability import Availability, EmployeeAvailability
from salon_booking.models.employee import Employee
from salon_booking.models.provider import Provider
from salon_booking.schemas.scheduling import (
    AvailabilityWindow,
    EmployeeScope,
    OwnerScope,
    ProviderScope,
)

logger = logging.getLogger(__name__)


class AvailabilitySource:
    """Resolves the weekly window an owner accepts appointments in"""

    @staticmethod
    def resolve_window(
            db: Session,
            scope: OwnerScope,
            weekday: int,
            use_custom_schedule: bool = True
    ) -> Optional[AvailabilityWindow]:
        """
        Get the single active window for a weekday (0=Sunday), or None.

        Employees only use their own rows when use_custom_schedule is True,
        otherwise they work the provider's hours. Only the earliest window
        of the day is used. A missing or inactive owner means no availability.
        """
        if isinstance(scope, EmployeeScope):
            employee = db.query(Employee).filter(
                Employee.id == scope.employee_id,
                Employee.provider_id == scope.provider_id
            ).first()

            if not employee or not employee.is_active:
                logger.info(f"Employee {scope.employee_id} not found or inactive, no availability")
                return None

            if use_custom_schedule:
                return AvailabilitySource._employee_window(db, scope.employee_id, weekday)

        return AvailabilitySource._provider_window(db, scope.provider_id, weekday)

    @staticmethod
    def employee_uses_custom_schedule(db: Session, scope: OwnerScope) -> bool:
        """Whether an employee scope should read the employee's own rows"""
        if isinstance(scope, ProviderScope):
            return False

        employee = db.query(Employee).filter(Employee.id == scope.employee_id).first()
        return bool(employee and employee.custom_schedule_enabled)

    @staticmethod
    def _provider_window(db: Session, provider_id: str, weekday: int) -> Optional[AvailabilityWindow]:
        provider = db.query(Provider).filter(Provider.id == provider_id).first()
        if not provider or not provider.is_active:
            return None

        row = db.query(Availability).filter(
            Availability.provider_id == provider_id,
            Availability.weekday == weekday,
            Availability.is_active.is_(True)
        ).order_by(Availability.start_time.asc()).first()

        if not row:
            return None

        return AvailabilityWindow(
            owner_id=provider_id,
            weekday=row.weekday,
            start_time=row.start_time,
            end_time=row.end_time,
            active=True,
        )

    @staticmethod
    def _employee_window(db: Session, employee_id: str, weekday: int) -> Optional[AvailabilityWindow]:
        row = db.query(EmployeeAvailability).filter(
            EmployeeAvailability.employee_id == employee_id,
            EmployeeAvailability.day_of_week == weekday,
            EmployeeAvailability.is_available.is_(True)
        ).order_by(EmployeeAvailability.start_time.asc()).first()

        if not row:
            return None

        return AvailabilityWindow(
            owner_id=employee_id,
            weekday=row.day_of_week,
            start_time=row.start_time,
            end_time=row.end_time,
            active=True,
        )
