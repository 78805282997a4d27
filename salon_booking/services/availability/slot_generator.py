# ===== salon_booking/services/availability/slot_generator.py =====
from datetime import date
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from salon_booking.config.settings import get_settings
from salon_booking.models.service import Service
from salon_booking.schemas.scheduling import OwnerScope, build_scope
from salon_booking.services.appointment.ledger_reader import BookingLedgerReader
from salon_booking.services.availability.availability_source import AvailabilitySource
from salon_booking.services.availability.overlap import find_conflicts
from salon_booking.services.settings.scheduling_settings_service import SchedulingSettingsService
from salon_booking.utils.time_utils import minutes_to_label, weekday_index

logger = logging.getLogger(__name__)


class SlotGenerationError(Exception):
    """A data read failed while computing slots; no partial result is returned"""


class SlotGenerator:
    """Computes bookable start times for an owner on a date"""

    @staticmethod
    def generate_slots(
            db: Session,
            scope: OwnerScope,
            target_date: date,
            service_duration_minutes: int
    ) -> List[str]:
        """
        Walk the day's window every SLOT_INCREMENT_MINUTES and keep each start
        whose [start, start + duration) fits the window and misses every
        occupying appointment (widened by the provider's buffers).

        Returns ascending HH:MM labels; [] when the owner has no window that day.
        Raises SlotGenerationError when availability, settings or the ledger
        cannot be read.
        """
        if service_duration_minutes <= 0:
            raise ValueError("Service duration must be positive")

        increment = get_settings().SLOT_INCREMENT_MINUTES

        try:
            use_custom = AvailabilitySource.employee_uses_custom_schedule(db, scope)
            window = AvailabilitySource.resolve_window(
                db, scope, weekday_index(target_date), use_custom_schedule=use_custom
            )
            if not window:
                return []

            settings = SchedulingSettingsService.get_settings(db, scope.provider_id)

            slots = []
            occupying = None
            window_end = window.end_minutes
            cursor = window.start_minutes

            while cursor < window_end:
                slot_end = cursor + service_duration_minutes

                # Later starts can only end later
                if slot_end > window_end:
                    break

                if not settings.allow_overlaps:
                    if occupying is None:
                        occupying = BookingLedgerReader.list_occupying(db, scope, target_date)

                    if find_conflicts(cursor, slot_end, occupying, settings):
                        cursor += increment
                        continue

                slots.append(minutes_to_label(cursor))
                cursor += increment

            return slots

        except SQLAlchemyError as exc:
            raise SlotGenerationError(
                f"Could not compute slots for {scope.kind} {scope.provider_id} on {target_date}"
            ) from exc

    @staticmethod
    def list_available_slots(
            db: Session,
            provider_id: str,
            target_date: date,
            service_id: Optional[str] = None,
            employee_id: Optional[str] = None
    ) -> List[str]:
        """
        Best-effort listing for the booking screen: resolves the scope and the
        service duration, and degrades to [] (logged) on read failures.
        """
        scope = build_scope(provider_id, employee_id)

        try:
            duration = SlotGenerator._service_duration(db, service_id)
            slots = SlotGenerator.generate_slots(db, scope, target_date, duration)
        except SQLAlchemyError as e:
            logger.error(f"Service lookup failed for {service_id}: {e}")
            return []
        except SlotGenerationError as e:
            logger.error(f"{e}: {e.__cause__}")
            return []

        logger.info(
            f"Generated {len(slots)} slots for {scope.kind} "
            f"{getattr(scope, 'employee_id', provider_id)} on {target_date}"
        )
        return slots

    @staticmethod
    def _service_duration(db: Session, service_id: Optional[str]) -> int:
        default_duration = get_settings().DEFAULT_SERVICE_DURATION_MINUTES
        if not service_id:
            return default_duration

        service = db.query(Service).filter(Service.id == service_id).first()
        if not service or not service.duration_minutes:
            return default_duration

        return service.duration_minutes
