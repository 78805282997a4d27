# ============================================================================
# salon_booking/services/notification/notification_service.py
# Builds and stores in-app notifications for appointment events
# ============================================================================
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
import logging

from salon_booking.models.appointment import Appointment
from salon_booking.models.notification import Notification
from salon_booking.models.provider import Provider
from salon_booking.models.service import Service

logger = logging.getLogger(__name__)

APPOINTMENT_EVENTS = ("created", "confirmed", "cancelled", "rescheduled", "reminder")

_TITLES = {
    "created": "New appointment request",
    "confirmed": "Appointment confirmed",
    "cancelled": "Appointment cancelled",
    "rescheduled": "Appointment rescheduled",
    "reminder": "Upcoming appointment",
}


class NotificationService:
    """Persists notifications; delivery to devices happens outside this service"""

    @staticmethod
    def build_message(event: str, appointment: Appointment, provider_name: str,
                      service_name: Optional[str] = None) -> tuple[str, str]:
        """Title and body for an appointment event"""
        if event not in _TITLES:
            raise ValueError(f"Invalid event type: {event}")

        when = f"{appointment.appointment_date.isoformat()} at {appointment.appointment_time.strftime('%H:%M')}"
        what = service_name or "your service"

        bodies = {
            "created": f"{what} was requested for {when}.",
            "confirmed": f"{provider_name} confirmed {what} on {when}.",
            "cancelled": f"{what} with {provider_name} on {when} was cancelled.",
            "rescheduled": f"{what} with {provider_name} moved to {when} and awaits confirmation.",
            "reminder": f"{what} with {provider_name} is on {when}.",
        }
        return _TITLES[event], bodies[event]

    @staticmethod
    def notify_appointment_event(
            db: Session,
            appointment_id: str,
            event: str,
            recipient_user_ids: Iterable[str]
    ) -> List[Notification]:
        """Create one notification per recipient for an appointment event"""
        appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()
        if not appointment:
            logger.warning(f"Appointment {appointment_id} not found, skipping '{event}' notification")
            return []

        provider = db.query(Provider).filter(Provider.id == appointment.provider_id).first()
        service = db.query(Service).filter(Service.id == appointment.service_id).first()

        title, body = NotificationService.build_message(
            event,
            appointment,
            provider_name=provider.business_name if provider else "your provider",
            service_name=service.name if service else None,
        )

        notifications = []
        for user_id in dict.fromkeys(recipient_user_ids):
            notification = Notification(
                user_id=user_id,
                appointment_id=appointment.id,
                event=event,
                title=title,
                body=body,
                data={
                    "appointment_id": appointment.id,
                    "provider_id": appointment.provider_id,
                    "status": appointment.status,
                },
            )
            db.add(notification)
            notifications.append(notification)

        db.commit()
        logger.info(f"Stored {len(notifications)} '{event}' notifications for appointment {appointment_id}")
        return notifications
