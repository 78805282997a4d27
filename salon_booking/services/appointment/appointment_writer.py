# ============================================================================
# salon_booking/services/appointment/appointment_writer.py
# The only component that mutates appointments
# ============================================================================
"""
Appointment state machine:

    pending   -> confirmed | cancelled
    confirmed -> cancelled | done
    pending | confirmed -> pending   (reschedule only, new date/time)

cancelled and done are terminal. Every date/time mutation is re-validated
inside the write transaction while the provider row is locked, so two
clients racing for the same slot are serialised by the database.
"""
from datetime import date, datetime, timezone
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from salon_booking.config.settings import get_settings
from salon_booking.models.appointment import Appointment, AppointmentStatus
from salon_booking.models.employee import Employee
from salon_booking.models.provider import Provider
from salon_booking.models.service import Service
from salon_booking.schemas.appointment import AppointmentRead, AppointmentWriteResult
from salon_booking.schemas.scheduling import SlotValidationRequest, normalize_employee_id
from salon_booking.services.appointment.conflict_validator import ConflictValidator
from salon_booking.services.appointment.errors import (
    AppointmentNotFoundError,
    AppointmentPermissionError,
    IllegalTransitionError,
)
from salon_booking.services.notification.dispatcher import NotificationDispatcher
from salon_booking.utils.time_utils import minutes_to_time, parse_time_label

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    AppointmentStatus.PENDING.value: {AppointmentStatus.CONFIRMED.value, AppointmentStatus.CANCELLED.value},
    AppointmentStatus.CONFIRMED.value: {AppointmentStatus.CANCELLED.value, AppointmentStatus.DONE.value},
    AppointmentStatus.CANCELLED.value: set(),
    AppointmentStatus.DONE.value: set(),
}

RESCHEDULABLE_STATUSES = {AppointmentStatus.PENDING.value, AppointmentStatus.CONFIRMED.value}

# Status changes the other party hears about
NOTIFIED_STATUSES = {AppointmentStatus.CONFIRMED.value, AppointmentStatus.CANCELLED.value}

WRITE_FAILED_MESSAGE = "We couldn't save your appointment right now. Please try again."


class AppointmentWriter:

    @staticmethod
    def create(
            db: Session,
            client_id: str,
            provider_id: str,
            service_id: str,
            appointment_date: date,
            appointment_time: str,
            employee_id: Optional[str] = None,
            notes: Optional[str] = None
    ) -> AppointmentWriteResult:
        """
        Book a slot for a client. The slot is validated authoritatively in the
        same transaction as the insert; on rejection nothing is written and the
        validator's reason/message are returned.
        """
        employee_id = normalize_employee_id(employee_id)

        try:
            AppointmentWriter._lock_provider(db, provider_id)

            validation = ConflictValidator.validate_slot(db, SlotValidationRequest(
                provider_id=provider_id,
                service_id=service_id,
                appointment_date=appointment_date,
                appointment_time=appointment_time,
                employee_id=employee_id,
            ))

            if not validation.ok:
                db.rollback()
                logger.info(
                    f"Booking rejected for client {client_id} at {appointment_date} "
                    f"{appointment_time}: {validation.reason}"
                )
                return AppointmentWriteResult(
                    ok=False,
                    reason=validation.reason,
                    message=validation.message,
                    settings=validation.settings,
                )

            appointment = Appointment(
                client_id=client_id,
                provider_id=provider_id,
                service_id=service_id,
                employee_id=employee_id,
                appointment_date=appointment_date,
                appointment_time=minutes_to_time(parse_time_label(appointment_time)),
                duration_minutes=AppointmentWriter._service_duration(db, service_id),
                status=AppointmentStatus.PENDING.value,
                notes=notes or None,
            )

            db.add(appointment)
            db.commit()
            db.refresh(appointment)

        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error creating appointment for provider {provider_id}: {e}")
            return AppointmentWriteResult(ok=False, reason="error", message=WRITE_FAILED_MESSAGE)

        logger.info(f"Appointment {appointment.id} created (pending) for provider {provider_id}")
        NotificationDispatcher.notify(db, appointment, "created", actor_user_id=client_id)

        return AppointmentWriteResult(
            ok=True,
            appointment=AppointmentRead.model_validate(appointment),
            settings=validation.settings,
        )

    @staticmethod
    def set_status(
            db: Session,
            appointment_id: str,
            new_status: str,
            requester_id: str
    ) -> Appointment:
        """
        Move an appointment along the state machine. Status-only changes keep
        the reserved time, so no slot validation is needed.
        """
        appointment = AppointmentWriter._get_appointment(db, appointment_id, for_update=True)

        try:
            role = AppointmentWriter._requester_role(db, appointment, requester_id)

            current = appointment.status
            if new_status not in ALLOWED_TRANSITIONS.get(current, set()):
                detail = "use reschedule to return an appointment to pending" \
                    if new_status == AppointmentStatus.PENDING.value else ""
                raise IllegalTransitionError(current, new_status, detail)

            if role == "client" and new_status != AppointmentStatus.CANCELLED.value:
                raise AppointmentPermissionError("Clients can only cancel their appointments")
        except (AppointmentPermissionError, IllegalTransitionError):
            db.rollback()
            raise

        appointment.status = new_status
        appointment.updated_at = datetime.now(timezone.utc)
        if new_status == AppointmentStatus.CANCELLED.value:
            appointment.cancelled_at = datetime.now(timezone.utc)

        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error moving appointment {appointment_id} to {new_status}: {e}")
            raise

        db.refresh(appointment)

        logger.info(f"Appointment {appointment_id} moved from {current} to {new_status} by {role}")

        if new_status in NOTIFIED_STATUSES:
            NotificationDispatcher.notify(db, appointment, new_status, actor_user_id=requester_id)

        return appointment

    @staticmethod
    def reschedule(
            db: Session,
            appointment_id: str,
            new_date: date,
            new_time: str,
            requester_id: str
    ) -> AppointmentWriteResult:
        """
        Move an appointment to a new date/time. The appointment is ignored
        when checking for conflicts, and goes back to pending so the provider
        confirms again.
        """
        appointment = AppointmentWriter._get_appointment(db, appointment_id)
        AppointmentWriter._requester_role(db, appointment, requester_id)

        if appointment.status not in RESCHEDULABLE_STATUSES:
            raise IllegalTransitionError(
                appointment.status, AppointmentStatus.PENDING.value,
                "finished or cancelled appointments cannot be rescheduled"
            )

        try:
            AppointmentWriter._lock_provider(db, appointment.provider_id)

            # Re-read under lock: a concurrent cancel must not be overwritten
            appointment = AppointmentWriter._get_appointment(db, appointment_id, for_update=True)
            if appointment.status not in RESCHEDULABLE_STATUSES:
                current = appointment.status
                db.rollback()
                raise IllegalTransitionError(
                    current, AppointmentStatus.PENDING.value,
                    "finished or cancelled appointments cannot be rescheduled"
                )

            validation = ConflictValidator.validate_slot(db, SlotValidationRequest(
                provider_id=appointment.provider_id,
                service_id=appointment.service_id,
                appointment_date=new_date,
                appointment_time=new_time,
                employee_id=appointment.employee_id,
                ignore_appointment_id=appointment.id,
            ))

            if not validation.ok:
                db.rollback()
                return AppointmentWriteResult(
                    ok=False,
                    reason=validation.reason,
                    message=validation.message,
                    settings=validation.settings,
                )

            appointment.appointment_date = new_date
            appointment.appointment_time = minutes_to_time(parse_time_label(new_time))
            # Store the interval that was just validated
            appointment.duration_minutes = AppointmentWriter._service_duration(db, appointment.service_id)
            appointment.status = AppointmentStatus.PENDING.value
            appointment.updated_at = datetime.now(timezone.utc)

            db.commit()
            db.refresh(appointment)

        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error rescheduling appointment {appointment_id}: {e}")
            return AppointmentWriteResult(ok=False, reason="error", message=WRITE_FAILED_MESSAGE)

        logger.info(f"Appointment {appointment_id} rescheduled to {new_date} {new_time}")
        NotificationDispatcher.notify(db, appointment, "rescheduled", actor_user_id=requester_id)

        return AppointmentWriteResult(
            ok=True,
            appointment=AppointmentRead.model_validate(appointment),
            settings=validation.settings,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _lock_provider(db: Session, provider_id: str) -> None:
        """Row lock held until commit/rollback; serialises bookings per provider"""
        db.query(Provider.id).filter(Provider.id == provider_id).with_for_update().first()

    @staticmethod
    def _get_appointment(db: Session, appointment_id: str, for_update: bool = False) -> Appointment:
        query = db.query(Appointment).filter(Appointment.id == appointment_id)
        if for_update:
            query = query.with_for_update().populate_existing()

        appointment = query.first()
        if not appointment:
            raise AppointmentNotFoundError(f"Appointment {appointment_id} not found")
        return appointment

    @staticmethod
    def _requester_role(db: Session, appointment: Appointment, requester_id: str) -> str:
        """client, provider or employee; anyone else may not touch the appointment"""
        if appointment.client_id == requester_id:
            return "client"

        provider = db.query(Provider).filter(Provider.id == appointment.provider_id).first()
        if provider and provider.user_id == requester_id:
            return "provider"

        if appointment.employee_id:
            employee = db.query(Employee).filter(Employee.id == appointment.employee_id).first()
            if employee and employee.user_id and employee.user_id == requester_id:
                return "employee"

        raise AppointmentPermissionError("You don't have permission to update this appointment")

    @staticmethod
    def _service_duration(db: Session, service_id: str) -> int:
        service = db.query(Service).filter(Service.id == service_id).first()
        if service and service.duration_minutes:
            return service.duration_minutes
        return get_settings().DEFAULT_SERVICE_DURATION_MINUTES
