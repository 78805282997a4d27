"""
Pydantic schemas passed between the scheduling services.

The data layer hands the engine typed records (windows, occupying
appointments, settings) instead of raw rows.
"""
from datetime import date, time
from typing import Optional, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from salon_booking.utils.time_utils import parse_time_label, minutes_to_label


# ============================================================================
# Owner scope
# ============================================================================

class ProviderScope(BaseModel):
    """Calendar of a whole provider: any employee's booking occupies it"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["provider"] = "provider"
    provider_id: str


class EmployeeScope(BaseModel):
    """Calendar of one employee of a provider"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["employee"] = "employee"
    employee_id: str
    provider_id: str


OwnerScope = Union[ProviderScope, EmployeeScope]


def normalize_employee_id(employee_id: Optional[str]) -> Optional[str]:
    """'any' (or blank) means no specific employee"""
    if not employee_id or employee_id == "any":
        return None
    return employee_id


def build_scope(provider_id: str, employee_id: Optional[str] = None) -> OwnerScope:
    employee_id = normalize_employee_id(employee_id)
    if employee_id:
        return EmployeeScope(employee_id=employee_id, provider_id=provider_id)
    return ProviderScope(provider_id=provider_id)


# ============================================================================
# Availability / ledger records
# ============================================================================

class AvailabilityWindow(BaseModel):
    owner_id: str
    weekday: int = Field(..., ge=0, le=6, description="0=Sunday")
    start_time: time
    end_time: time
    active: bool = True

    @property
    def start_minutes(self) -> int:
        return parse_time_label(self.start_time)

    @property
    def end_minutes(self) -> int:
        return parse_time_label(self.end_time)


class OccupyingAppointment(BaseModel):
    id: str
    time: str  # HH:MM
    duration_minutes: int
    employee_id: Optional[str] = None

    @property
    def start_minutes(self) -> int:
        return parse_time_label(self.time)

    @property
    def end_minutes(self) -> int:
        return self.start_minutes + self.duration_minutes

    @property
    def label(self) -> str:
        return f"{minutes_to_label(self.start_minutes)} - {minutes_to_label(self.end_minutes)}"


# ============================================================================
# Scheduling settings
# ============================================================================

# (min, max) accepted for each numeric setting; anything outside is clamped
SETTINGS_LIMITS = {
    "buffer_before_minutes": (0, 240),
    "buffer_after_minutes": (0, 240),
    "cancellation_policy_hours": (0, 168),
    "reminder_lead_time_minutes": (0, 4320),
}

DEFAULT_BUFFER_BEFORE_MINUTES = 0
DEFAULT_BUFFER_AFTER_MINUTES = 0
DEFAULT_CANCELLATION_POLICY_HOURS = 12
DEFAULT_REMINDER_LEAD_TIME_MINUTES = 60


def clamp_setting(name: str, value, default: int) -> int:
    """Coerce a raw setting to an int inside its range; unparsable values take the default"""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default

    low, high = SETTINGS_LIMITS[name]
    return max(low, min(number, high))


class SchedulingSettings(BaseModel):
    """Provider scheduling policy as used by the slot generator and validator"""
    buffer_before_minutes: int = DEFAULT_BUFFER_BEFORE_MINUTES
    buffer_after_minutes: int = DEFAULT_BUFFER_AFTER_MINUTES
    allow_overlaps: bool = False
    cancellation_policy_hours: int = DEFAULT_CANCELLATION_POLICY_HOURS
    cancellation_policy_message: str = ""
    reminder_lead_time_minutes: int = DEFAULT_REMINDER_LEAD_TIME_MINUTES

    @field_validator("buffer_before_minutes", mode="before")
    @classmethod
    def clamp_buffer_before(cls, v):
        return clamp_setting("buffer_before_minutes", v, DEFAULT_BUFFER_BEFORE_MINUTES)

    @field_validator("buffer_after_minutes", mode="before")
    @classmethod
    def clamp_buffer_after(cls, v):
        return clamp_setting("buffer_after_minutes", v, DEFAULT_BUFFER_AFTER_MINUTES)

    @field_validator("cancellation_policy_hours", mode="before")
    @classmethod
    def clamp_cancellation_hours(cls, v):
        return clamp_setting("cancellation_policy_hours", v, DEFAULT_CANCELLATION_POLICY_HOURS)

    @field_validator("reminder_lead_time_minutes", mode="before")
    @classmethod
    def clamp_reminder_lead(cls, v):
        return clamp_setting("reminder_lead_time_minutes", v, DEFAULT_REMINDER_LEAD_TIME_MINUTES)

    @field_validator("allow_overlaps", mode="before")
    @classmethod
    def coerce_allow_overlaps(cls, v):
        if isinstance(v, str):
            return v.strip().lower() in ("true", "1", "yes", "on")
        return bool(v)

    @field_validator("cancellation_policy_message", mode="before")
    @classmethod
    def coerce_message(cls, v):
        return v.strip() if isinstance(v, str) else ""


class SchedulingSettingsUpdate(BaseModel):
    """Partial update; only the fields that are sent are changed"""
    buffer_before_minutes: Optional[int] = None
    buffer_after_minutes: Optional[int] = None
    allow_overlaps: Optional[bool] = None
    cancellation_policy_hours: Optional[int] = None
    cancellation_policy_message: Optional[str] = None
    reminder_lead_time_minutes: Optional[int] = None


# ============================================================================
# Slot validation
# ============================================================================

ValidationReason = Literal[
    "conflict",
    "error",
    "invalid_service",
    "invalid_time",
    "provider_offline",
    "employee_offline",
]


class SlotValidationRequest(BaseModel):
    provider_id: str
    service_id: str
    appointment_date: date
    appointment_time: str = Field(..., description="HH:MM, provider-local")
    employee_id: Optional[str] = None
    ignore_appointment_id: Optional[str] = None

    @field_validator("employee_id")
    @classmethod
    def drop_any_employee(cls, v):
        return normalize_employee_id(v)


class SlotValidationResult(BaseModel):
    ok: bool
    reason: Optional[ValidationReason] = None
    message: Optional[str] = None
    settings: SchedulingSettings = Field(default_factory=SchedulingSettings)
    conflicting_appointment_ids: List[str] = Field(default_factory=list)
