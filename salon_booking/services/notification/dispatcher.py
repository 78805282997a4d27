# ============================================================================
# salon_booking/services/notification/dispatcher.py
# Fire-and-forget hand-off of appointment events to the Celery worker
# ============================================================================
from typing import Iterable, List, Optional
import logging

from salon_booking.models.appointment import Appointment
from salon_booking.models.employee import Employee
from salon_booking.models.provider import Provider
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Queues notifications; a failure here never fails the booking"""

    @staticmethod
    def recipients_for(
            db: Session,
            appointment: Appointment,
            exclude_user_id: Optional[str] = None
    ) -> List[str]:
        """Client, provider owner and assigned employee, minus whoever acted"""
        recipients = [appointment.client_id]

        provider = db.query(Provider).filter(Provider.id == appointment.provider_id).first()
        if provider and provider.user_id:
            recipients.append(provider.user_id)

        if appointment.employee_id:
            employee = db.query(Employee).filter(Employee.id == appointment.employee_id).first()
            if employee and employee.user_id:
                recipients.append(employee.user_id)

        return [user_id for user_id in dict.fromkeys(recipients) if user_id != exclude_user_id]

    @staticmethod
    def dispatch(appointment_id: str, event: str, recipient_user_ids: Iterable[str]) -> None:
        recipients = list(recipient_user_ids)
        if not recipients:
            return

        from salon_booking.tasks.notification_tasks import send_appointment_notification

        try:
            send_appointment_notification.delay(appointment_id, event, recipients)
            logger.info(f"Queued '{event}' notification for appointment {appointment_id} to {len(recipients)} users")
        except Exception as e:
            logger.warning(f"Could not queue '{event}' notification for appointment {appointment_id}: {e}")

    @staticmethod
    def notify(db: Session, appointment: Appointment, event: str, actor_user_id: Optional[str]) -> None:
        try:
            recipients = NotificationDispatcher.recipients_for(db, appointment, exclude_user_id=actor_user_id)
        except Exception as e:
            logger.warning(f"Could not resolve recipients for appointment {appointment.id}: {e}")
            return

        NotificationDispatcher.dispatch(appointment.id, event, recipients)
