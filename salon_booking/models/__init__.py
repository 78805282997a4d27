# salon_booking/models/__init__.py
from .base import Base
from .provider import Provider
from .employee import Employee
from .service import Service
from .availability import Availability, EmployeeAvailability
from .provider_settings import ProviderSettings
from .appointment import Appointment, AppointmentStatus, OCCUPYING_STATUSES
from .notification import Notification, AppointmentReminderLog

__all__ = [
    "Base",
    "Provider",
    "Employee",
    "Service",
    "Availability",
    "EmployeeAvailability",
    "ProviderSettings",
    "Appointment",
    "AppointmentStatus",
    "OCCUPYING_STATUSES",
    "Notification",
    "AppointmentReminderLog",
]
