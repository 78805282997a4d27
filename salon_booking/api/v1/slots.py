# ============================================================================
# salon_booking/api/v1/slots.py
# Bookable times for the booking screen - thin HTTP layer
# ============================================================================
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy.orm import Session

from salon_booking.config.database import get_db
from salon_booking.schemas.appointment import SlotListResponse
from salon_booking.schemas.scheduling import normalize_employee_id
from salon_booking.services.availability.slot_generator import SlotGenerator

router = APIRouter(tags=["slots"])


@router.get("/providers/{provider_id}/slots", response_model=SlotListResponse)
async def list_slots(
        provider_id: str = Path(..., description="The provider ID"),
        target_date: date = Query(..., alias="date", description="Day to list, YYYY-MM-DD"),
        service_id: Optional[str] = Query(None, description="Service whose duration sizes the slots"),
        employee_id: Optional[str] = Query(None, description="Employee ID, or 'any' for the whole provider"),
        db: Session = Depends(get_db)
):
    """
    List start times (HH:MM) still free on a day.
    An empty list means nothing is bookable, including when the lookup failed.
    """
    slots = SlotGenerator.list_available_slots(
        db=db,
        provider_id=provider_id,
        target_date=target_date,
        service_id=service_id,
        employee_id=employee_id
    )

    return SlotListResponse(
        provider_id=provider_id,
        employee_id=normalize_employee_id(employee_id),
        appointment_date=target_date,
        slots=slots
    )
