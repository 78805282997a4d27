# ============================================================================
# salon_booking/api/v1/employees.py
# Employee working hours - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from salon_booking.api.dependencies import get_current_user_id, require_employee_manager
from salon_booking.config.database import get_db
from salon_booking.schemas.appointment import CustomScheduleToggle, WeeklyScheduleRequest
from salon_booking.services.schedule.schedule_service import ScheduleService

router = APIRouter(prefix="/employees", tags=["employees"])


@router.put("/{employee_id}/availability")
async def replace_employee_availability(
        payload: WeeklyScheduleRequest,
        employee_id: str = Path(..., description="The employee ID"),
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    """
    Replace the employee's own weekly hours.
    They only apply while the custom schedule is enabled.
    """
    employee = require_employee_manager(db, employee_id, user_id)

    try:
        rows = ScheduleService.replace_employee_availability(db, employee.id, payload.days)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {
        "employee_id": employee.id,
        "custom_schedule_enabled": bool(employee.custom_schedule_enabled),
        "working_days": [row.day_of_week for row in rows],
    }


@router.patch("/{employee_id}/custom-schedule")
async def toggle_custom_schedule(
        payload: CustomScheduleToggle,
        employee_id: str = Path(..., description="The employee ID"),
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    """Switch between the employee's own hours and the provider's hours"""
    require_employee_manager(db, employee_id, user_id)

    employee = ScheduleService.set_employee_custom_schedule(db, employee_id, payload.enabled)

    return {
        "employee_id": employee.id,
        "custom_schedule_enabled": bool(employee.custom_schedule_enabled),
    }
