# ===== salon_booking/tasks/reminder_tasks.py =====
from datetime import datetime
import logging

from salon_booking.config.celery_config import celery_app
from salon_booking.config.database import SessionLocal
from salon_booking.services.notification.reminder_service import ReminderService

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=3)
def send_appointment_reminders(self):
    """Periodic: remind clients of confirmed appointments inside their provider's lead time"""
    db = SessionLocal()
    try:
        sent = ReminderService.send_due_reminders(db, datetime.now())
        return {"status": "success", "sent": sent}

    except Exception as exc:
        db.rollback()
        logger.error(f"Reminder run failed: {exc}")
        raise self.retry(exc=exc, countdown=60 * (2 ** self.request.retries))
    finally:
        db.close()
