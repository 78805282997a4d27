# salon_booking/schemas/__init__.py
from .scheduling import (
    ProviderScope,
    EmployeeScope,
    OwnerScope,
    build_scope,
    normalize_employee_id,
    AvailabilityWindow,
    OccupyingAppointment,
    SchedulingSettings,
    SchedulingSettingsUpdate,
    SlotValidationRequest,
    SlotValidationResult,
)
from .appointment import (
    AppointmentRead,
    AppointmentWriteResult,
    SlotListResponse,
    AppointmentCreateRequest,
    AppointmentStatusUpdate,
    AppointmentRescheduleRequest,
    DaySchedule,
    WeeklyScheduleRequest,
    CustomScheduleToggle,
)

__all__ = [
    "ProviderScope",
    "EmployeeScope",
    "OwnerScope",
    "build_scope",
    "normalize_employee_id",
    "AvailabilityWindow",
    "OccupyingAppointment",
    "SchedulingSettings",
    "SchedulingSettingsUpdate",
    "SlotValidationRequest",
    "SlotValidationResult",
    "AppointmentRead",
    "AppointmentWriteResult",
    "SlotListResponse",
    "AppointmentCreateRequest",
    "AppointmentStatusUpdate",
    "AppointmentRescheduleRequest",
    "DaySchedule",
    "WeeklyScheduleRequest",
    "CustomScheduleToggle",
]
