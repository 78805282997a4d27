# ============================================================================
# salon_booking/services/notification/reminder_service.py
# Reminders for confirmed appointments, honouring each provider's lead time
# ============================================================================
from datetime import datetime, timedelta
from typing import Dict
from sqlalchemy.orm import Session
import logging

from salon_booking.config.settings import get_settings
from salon_booking.models.appointment import Appointment, AppointmentStatus
from salon_booking.models.notification import AppointmentReminderLog
from salon_booking.schemas.scheduling import SchedulingSettings
from salon_booking.services.notification.notification_service import NotificationService
from salon_booking.services.settings.scheduling_settings_service import SchedulingSettingsService

logger = logging.getLogger(__name__)

REMINDER_CHANNEL = "in_app"


class ReminderService:

    @staticmethod
    def send_due_reminders(db: Session, now: datetime) -> int:
        """
        Remind clients whose confirmed appointment starts within the provider's
        reminder_lead_time_minutes. Each appointment is reminded once.

        ``now`` is provider-local wall-clock time. Returns the number sent.
        """
        lookahead_days = get_settings().REMINDER_LOOKAHEAD_DAYS

        appointments = db.query(Appointment).filter(
            Appointment.status == AppointmentStatus.CONFIRMED.value,
            Appointment.appointment_date >= now.date(),
            Appointment.appointment_date <= now.date() + timedelta(days=lookahead_days)
        ).order_by(Appointment.appointment_date.asc(), Appointment.appointment_time.asc()).all()

        if not appointments:
            return 0

        already_sent = {
            row.appointment_id
            for row in db.query(AppointmentReminderLog.appointment_id).filter(
                AppointmentReminderLog.appointment_id.in_([a.id for a in appointments]),
                AppointmentReminderLog.channel == REMINDER_CHANNEL
            ).all()
        }

        settings_cache: Dict[str, SchedulingSettings] = {}
        sent = 0

        for appointment in appointments:
            if appointment.id in already_sent:
                continue

            starts_at = datetime.combine(appointment.appointment_date, appointment.appointment_time)
            minutes_until = int((starts_at - now).total_seconds() // 60)
            if minutes_until <= 0:
                continue

            if appointment.provider_id not in settings_cache:
                settings_cache[appointment.provider_id] = SchedulingSettingsService.get_settings(
                    db, appointment.provider_id
                )
            lead = settings_cache[appointment.provider_id].reminder_lead_time_minutes

            if minutes_until > lead:
                continue

            db.add(AppointmentReminderLog(
                appointment_id=appointment.id,
                provider_id=appointment.provider_id,
                client_id=appointment.client_id,
                channel=REMINDER_CHANNEL,
                lead_minutes=lead,
            ))
            NotificationService.notify_appointment_event(
                db, appointment.id, "reminder", [appointment.client_id]
            )
            sent += 1

        if sent:
            logger.info(f"Sent {sent} appointment reminders")
        return sent
