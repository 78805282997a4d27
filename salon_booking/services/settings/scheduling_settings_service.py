# ============================================================================
# salon_booking/services/settings/scheduling_settings_service.py
# Provider scheduling policy (buffers, overlaps, cancellation, reminders)
# ============================================================================
from typing import Optional
from sqlalchemy.orm import Session
import logging

from salon_booking.models.provider_settings import ProviderSettings
from salon_booking.schemas.scheduling import SchedulingSettings, SchedulingSettingsUpdate

logger = logging.getLogger(__name__)


class SchedulingSettingsService:
    """Reads and writes the per-provider scheduling settings row"""

    @staticmethod
    def get_settings(db: Session, provider_id: str) -> SchedulingSettings:
        """
        Get the provider's settings, or the defaults when none were saved.
        Store errors propagate: the validator must not guess the policy.
        """
        row = db.query(ProviderSettings).filter(
            ProviderSettings.provider_id == provider_id
        ).first()

        if not row:
            return SchedulingSettings()

        return SchedulingSettingsService._to_schema(row)

    @staticmethod
    def upsert_settings(
            db: Session,
            provider_id: str,
            updates: SchedulingSettingsUpdate
    ) -> SchedulingSettings:
        """
        Create or update the provider's settings. Out-of-range numbers are
        clamped, fields not sent keep their current value.
        """
        row = db.query(ProviderSettings).filter(
            ProviderSettings.provider_id == provider_id
        ).first()

        current = SchedulingSettingsService._to_schema(row) if row else SchedulingSettings()
        merged = SchedulingSettings(
            **{**current.model_dump(), **updates.model_dump(exclude_none=True)}
        )

        if not row:
            row = ProviderSettings(provider_id=provider_id)
            db.add(row)

        row.buffer_before_minutes = merged.buffer_before_minutes
        row.buffer_after_minutes = merged.buffer_after_minutes
        row.allow_overlaps = merged.allow_overlaps
        row.cancellation_policy_hours = merged.cancellation_policy_hours
        row.cancellation_policy_message = merged.cancellation_policy_message
        row.reminder_lead_time_minutes = merged.reminder_lead_time_minutes

        db.commit()
        db.refresh(row)

        logger.info(f"Scheduling settings saved for provider {provider_id}: {merged.model_dump()}")
        return merged

    @staticmethod
    def _to_schema(row: Optional[ProviderSettings]) -> SchedulingSettings:
        return SchedulingSettings(
            buffer_before_minutes=row.buffer_before_minutes,
            buffer_after_minutes=row.buffer_after_minutes,
            allow_overlaps=row.allow_overlaps,
            cancellation_policy_hours=row.cancellation_policy_hours,
            cancellation_policy_message=row.cancellation_policy_message,
            reminder_lead_time_minutes=row.reminder_lead_time_minutes,
        )
