# ============================================================================
# salon_booking/services/appointment/ledger_reader.py
# Read-only view of the appointments that block time on a given day
# ============================================================================
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from salon_booking.config.settings import get_settings
from salon_booking.models.appointment import Appointment, OCCUPYING_STATUSES
from salon_booking.models.service import Service
from salon_booking.schemas.scheduling import EmployeeScope, OccupyingAppointment, OwnerScope
from salon_booking.utils.time_utils import minutes_to_label, parse_time_label

logger = logging.getLogger(__name__)


class BookingLedgerReader:
    """Lists occupying (pending/confirmed) appointments for an owner scope"""

    @staticmethod
    def list_occupying(
            db: Session,
            scope: OwnerScope,
            target_date: date,
            ignore_appointment_id: Optional[str] = None
    ) -> List[OccupyingAppointment]:
        """
        Occupying appointments of the provider (any employee) or of one
        employee on a date, ordered by start time.

        Duration comes from the snapshot stored at booking time, then the
        linked service, then FALLBACK_APPOINTMENT_DURATION_MINUTES.
        Store errors propagate to the caller.
        """
        fallback_duration = get_settings().FALLBACK_APPOINTMENT_DURATION_MINUTES

        query = db.query(Appointment, Service.duration_minutes).outerjoin(
            Service, Service.id == Appointment.service_id
        ).filter(
            Appointment.provider_id == scope.provider_id,
            Appointment.appointment_date == target_date,
            Appointment.status.in_(OCCUPYING_STATUSES)
        )

        if isinstance(scope, EmployeeScope):
            query = query.filter(Appointment.employee_id == scope.employee_id)

        if ignore_appointment_id:
            query = query.filter(Appointment.id != ignore_appointment_id)

        rows = query.order_by(Appointment.appointment_time.asc()).all()

        occupying = []
        for appointment, service_duration in rows:
            duration = appointment.duration_minutes or service_duration
            if not duration:
                logger.warning(
                    f"No duration for appointment {appointment.id} "
                    f"(service {appointment.service_id}), using {fallback_duration} minutes"
                )
                duration = fallback_duration

            occupying.append(OccupyingAppointment(
                id=appointment.id,
                time=minutes_to_label(parse_time_label(appointment.appointment_time)),
                duration_minutes=duration,
                employee_id=appointment.employee_id,
            ))

        return occupying
