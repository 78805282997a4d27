# ===== salon_booking/tasks/notification_tasks.py =====
from typing import List
import logging

from salon_booking.config.celery_config import celery_app
from salon_booking.config.database import SessionLocal
from salon_booking.services.notification.notification_service import NotificationService

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=3)
def send_appointment_notification(
        self,
        appointment_id: str,
        event: str,
        recipient_user_ids: List[str]
):
    """
    Store the notifications for an appointment event

    Args:
        appointment_id: Appointment the event is about
        event: created, confirmed, cancelled or rescheduled
        recipient_user_ids: Users to notify
    """
    db = SessionLocal()
    try:
        logger.info(f"Sending '{event}' notification for appointment {appointment_id}")

        notifications = NotificationService.notify_appointment_event(
            db, appointment_id, event, recipient_user_ids
        )

        return {"status": "success", "appointment_id": appointment_id, "sent": len(notifications)}

    except Exception as exc:
        db.rollback()
        logger.error(f"Failed to send '{event}' notification for appointment {appointment_id}: {exc}")

        # Retry with exponential backoff: 1min, 2min, 4min
        raise self.retry(
            exc=exc,
            countdown=60 * (2 ** self.request.retries)
        )
    finally:
        db.close()
