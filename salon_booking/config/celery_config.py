"""Celery application configuration"""
from celery import Celery

from salon_booking.config.settings import get_settings


def create_celery_app() -> Celery:
    """Create and configure the Celery application"""
    settings = get_settings()

    app = Celery(
        "salon_booking",
        broker=settings.CELERY_BROKER_URL,
        backend=settings.CELERY_RESULT_BACKEND,
        include=[
            "salon_booking.tasks.notification_tasks",
            "salon_booking.tasks.reminder_tasks",
        ],
    )

    app.conf.update(
        task_serializer=settings.CELERY_TASK_SERIALIZER,
        accept_content=["json"],
        result_serializer="json",
        timezone="UTC",
        enable_utc=True,
        task_always_eager=settings.CELERY_TASK_ALWAYS_EAGER,
        task_acks_late=True,
        worker_prefetch_multiplier=1,
        beat_schedule={
            "send-appointment-reminders": {
                "task": "salon_booking.tasks.reminder_tasks.send_appointment_reminders",
                "schedule": float(settings.REMINDER_INTERVAL_SECONDS),
            },
        },
    )

    return app


celery_app = create_celery_app()
