# ============================================================================
# salon_booking/services/appointment/appointment_query_service.py
# Read-only appointment lookups for the provider dashboard
# ============================================================================
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session

from salon_booking.models.appointment import Appointment, AppointmentStatus


class AppointmentQueryService:

    @staticmethod
    def get_expired_pending_appointments(
            db: Session,
            provider_id: str,
            today: Optional[date] = None
    ) -> List[Appointment]:
        """Pending appointments whose day has passed without the provider acting on them"""
        today = today or date.today()

        return db.query(Appointment).filter(
            Appointment.provider_id == provider_id,
            Appointment.status == AppointmentStatus.PENDING.value,
            Appointment.appointment_date < today
        ).order_by(Appointment.appointment_date.asc(), Appointment.appointment_time.asc()).all()

    @staticmethod
    def list_provider_appointments(
            db: Session,
            provider_id: str,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None,
            status: Optional[str] = None,
            skip: int = 0,
            limit: int = 50
    ) -> List[Appointment]:
        query = db.query(Appointment).filter(Appointment.provider_id == provider_id)

        if start_date:
            query = query.filter(Appointment.appointment_date >= start_date)
        if end_date:
            query = query.filter(Appointment.appointment_date <= end_date)
        if status:
            query = query.filter(Appointment.status == status)

        return query.order_by(
            Appointment.appointment_date.asc(), Appointment.appointment_time.asc()
        ).offset(skip).limit(limit).all()
