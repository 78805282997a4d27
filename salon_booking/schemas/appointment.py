"""
Pydantic schemas for appointment requests and responses
"""
from datetime import date, datetime, time
from typing import Optional, Literal, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from salon_booking.schemas.scheduling import ValidationReason, SchedulingSettings


# ============================================================================
# Response Schemas
# ============================================================================

class AppointmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    client_id: str
    provider_id: str
    service_id: str
    employee_id: Optional[str] = None
    appointment_date: date
    appointment_time: time
    duration_minutes: Optional[int] = None
    status: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("appointment_time")
    def serialize_time(self, value: time) -> str:
        return value.strftime("%H:%M")


class AppointmentWriteResult(BaseModel):
    """Outcome of a write that had to pass slot validation first"""
    ok: bool
    appointment: Optional[AppointmentRead] = None
    reason: Optional[ValidationReason] = None
    message: Optional[str] = None
    settings: Optional[SchedulingSettings] = None


class SlotListResponse(BaseModel):
    provider_id: str
    employee_id: Optional[str] = None
    appointment_date: date
    slots: List[str]


# ============================================================================
# Request Schemas
# ============================================================================

class AppointmentCreateRequest(BaseModel):
    provider_id: str
    service_id: str
    appointment_date: date
    appointment_time: str = Field(..., description="HH:MM")
    employee_id: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=1000)


class AppointmentStatusUpdate(BaseModel):
    status: Literal["confirmed", "cancelled", "done"]


class AppointmentRescheduleRequest(BaseModel):
    appointment_date: date
    appointment_time: str = Field(..., description="HH:MM")


class DaySchedule(BaseModel):
    """One weekday of a weekly schedule form"""
    enabled: bool = False
    start_time: str = Field("09:00", description="HH:MM")
    end_time: str = Field("18:00", description="HH:MM")


class WeeklyScheduleRequest(BaseModel):
    """Keys are lowercase weekday names (sunday..saturday)"""
    days: Dict[str, DaySchedule]


class CustomScheduleToggle(BaseModel):
    enabled: bool
