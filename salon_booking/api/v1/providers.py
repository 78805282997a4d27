# ============================================================================
# salon_booking/api/v1/providers.py
# Provider-facing settings, hours and pending follow-ups - thin HTTP layer
# ============================================================================
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Path
from sqlalchemy.orm import Session

from salon_booking.api.dependencies import get_provider_for_owner
from salon_booking.config.database import get_db
from salon_booking.models.provider import Provider
from salon_booking.schemas.appointment import AppointmentRead, WeeklyScheduleRequest
from salon_booking.schemas.scheduling import SchedulingSettings, SchedulingSettingsUpdate
from salon_booking.services.appointment.appointment_query_service import AppointmentQueryService
from salon_booking.services.schedule.schedule_service import ScheduleService
from salon_booking.services.settings.scheduling_settings_service import SchedulingSettingsService

router = APIRouter(prefix="/providers", tags=["providers"])


@router.get("/{provider_id}/settings", response_model=SchedulingSettings)
async def get_scheduling_settings(
        provider_id: str = Path(..., description="The provider ID"),
        db: Session = Depends(get_db)
):
    """Buffers, overlap policy, cancellation policy and reminder lead time"""
    return SchedulingSettingsService.get_settings(db, provider_id)


@router.put("/{provider_id}/settings", response_model=SchedulingSettings)
async def update_scheduling_settings(
        payload: SchedulingSettingsUpdate,
        provider: Provider = Depends(get_provider_for_owner),
        db: Session = Depends(get_db)
):
    """Save scheduling settings. Out-of-range values are clamped, not rejected."""
    return SchedulingSettingsService.upsert_settings(db, provider.id, payload)


@router.put("/{provider_id}/availability")
async def replace_availability(
        payload: WeeklyScheduleRequest,
        provider: Provider = Depends(get_provider_for_owner),
        db: Session = Depends(get_db)
):
    """Replace the provider's weekly opening hours"""
    try:
        rows = ScheduleService.replace_provider_availability(db, provider.id, payload.days)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {
        "provider_id": provider.id,
        "working_days": [row.weekday for row in rows],
    }


@router.get("/{provider_id}/appointments/expired-pending", response_model=List[AppointmentRead])
async def list_expired_pending(
        today: Optional[date] = Query(None, description="Reference day, defaults to today"),
        provider: Provider = Depends(get_provider_for_owner),
        db: Session = Depends(get_db)
):
    """Pending appointments from past days that still need a decision"""
    return AppointmentQueryService.get_expired_pending_appointments(db, provider.id, today)


@router.get("/{provider_id}/appointments", response_model=List[AppointmentRead])
async def list_appointments(
        start_date: Optional[date] = Query(None, description="Appointments on or after this date"),
        end_date: Optional[date] = Query(None, description="Appointments on or before this date"),
        status: Optional[str] = Query(None, description="pending, confirmed, cancelled or done"),
        skip: int = Query(0, ge=0),
        limit: int = Query(50, ge=1, le=100),
        provider: Provider = Depends(get_provider_for_owner),
        db: Session = Depends(get_db)
):
    return AppointmentQueryService.list_provider_appointments(
        db=db,
        provider_id=provider.id,
        start_date=start_date,
        end_date=end_date,
        status=status,
        skip=skip,
        limit=limit
    )
