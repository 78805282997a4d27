# ============================================================================
# salon_booking/services/appointment/conflict_validator.py
# Re-checks one (date, time) right before a booking is written
# ============================================================================
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from salon_booking.config.settings import get_settings
from salon_booking.models.employee import Employee
from salon_booking.models.service import Service
from salon_booking.schemas.scheduling import (
    EmployeeScope,
    SchedulingSettings,
    SlotValidationRequest,
    SlotValidationResult,
    build_scope,
)
from salon_booking.services.appointment.ledger_reader import BookingLedgerReader
from salon_booking.services.availability.availability_source import AvailabilitySource
from salon_booking.services.availability.overlap import find_conflicts
from salon_booking.services.settings.scheduling_settings_service import SchedulingSettingsService
from salon_booking.utils.time_utils import parse_time_label, weekday_index

logger = logging.getLogger(__name__)


class ConflictValidator:
    """Validates a single candidate slot against windows and the booking ledger"""

    @staticmethod
    def validate_slot(db: Session, request: SlotValidationRequest) -> SlotValidationResult:
        """
        Check that the requested time is inside the provider's (and employee's)
        window, on the slot grid, and free of occupying appointments once the
        provider's buffers are applied.

        Read failures return reason="error"; callers must block the booking
        for any ok=False result.
        """
        settings = SchedulingSettings()

        try:
            settings = SchedulingSettingsService.get_settings(db, request.provider_id)
            return ConflictValidator._validate(db, request, settings)

        except SQLAlchemyError as e:
            logger.error(
                f"Slot validation failed for provider {request.provider_id} "
                f"on {request.appointment_date} {request.appointment_time}: {e}"
            )
            return SlotValidationResult(
                ok=False,
                reason="error",
                message="We couldn't verify this time right now. Please try again.",
                settings=settings,
            )

    @staticmethod
    def _validate(
            db: Session,
            request: SlotValidationRequest,
            settings: SchedulingSettings
    ) -> SlotValidationResult:

        def reject(reason: str, message: str) -> SlotValidationResult:
            return SlotValidationResult(ok=False, reason=reason, message=message, settings=settings)

        service = db.query(Service).filter(
            Service.id == request.service_id,
            Service.provider_id == request.provider_id
        ).first()

        if not service or not service.is_active:
            return reject("invalid_service", "This service is no longer available.")

        duration = service.duration_minutes or get_settings().DEFAULT_SERVICE_DURATION_MINUTES

        try:
            start = parse_time_label(request.appointment_time)
        except ValueError:
            return reject("invalid_time", f"'{request.appointment_time}' is not a valid time.")
        end = start + duration

        scope = build_scope(request.provider_id, request.employee_id)
        use_custom = False

        if isinstance(scope, EmployeeScope):
            employee = db.query(Employee).filter(
                Employee.id == scope.employee_id,
                Employee.provider_id == scope.provider_id
            ).first()

            if not employee or not employee.is_active:
                return reject("employee_offline", "The selected professional is not available.")

            use_custom = bool(employee.custom_schedule_enabled)

        # Same window the slot generator walks for this scope
        window = AvailabilitySource.resolve_window(
            db, scope, weekday_index(request.appointment_date), use_custom_schedule=use_custom
        )
        offline_reason = "employee_offline" if use_custom else "provider_offline"
        owner_label = "The selected professional" if use_custom else "The provider"

        if not window:
            return reject(offline_reason, f"{owner_label} does not take appointments on this day.")

        if start < window.start_minutes or end > window.end_minutes:
            return reject(offline_reason, f"{owner_label} is not available at this time.")

        increment = get_settings().SLOT_INCREMENT_MINUTES
        if (start - window.start_minutes) % increment != 0:
            return reject(
                "invalid_time",
                f"Appointments start every {increment} minutes from {window.start_time.strftime('%H:%M')}."
            )

        if settings.allow_overlaps:
            return SlotValidationResult(ok=True, settings=settings)

        occupying = BookingLedgerReader.list_occupying(
            db, scope, request.appointment_date, request.ignore_appointment_id
        )
        conflicts = find_conflicts(start, end, occupying, settings)

        if conflicts:
            logger.info(
                f"Slot {request.appointment_date} {request.appointment_time} for provider "
                f"{request.provider_id} conflicts with {[c.id for c in conflicts]}"
            )
            return SlotValidationResult(
                ok=False,
                reason="conflict",
                message=f"This time overlaps another appointment ({conflicts[0].label}).",
                settings=settings,
                conflicting_appointment_ids=[c.id for c in conflicts],
            )

        return SlotValidationResult(ok=True, settings=settings)
