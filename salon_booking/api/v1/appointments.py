# ============================================================================
# salon_booking/api/v1/appointments.py
# Booking, validation and status changes - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salon_booking.api.dependencies import get_current_user_id
from salon_booking.config.database import get_db
from salon_booking.schemas.appointment import (
    AppointmentCreateRequest,
    AppointmentRead,
    AppointmentRescheduleRequest,
    AppointmentStatusUpdate,
    AppointmentWriteResult,
)
from salon_booking.schemas.scheduling import SlotValidationRequest, SlotValidationResult
from salon_booking.services.appointment.appointment_writer import AppointmentWriter
from salon_booking.services.appointment.conflict_validator import ConflictValidator
from salon_booking.services.appointment.errors import (
    AppointmentNotFoundError,
    AppointmentPermissionError,
    IllegalTransitionError,
)

router = APIRouter(prefix="/appointments", tags=["appointments"])


def _raise_for_rejection(result: AppointmentWriteResult) -> None:
    """Map a rejected write to the HTTP status the client acts on"""
    if result.ok:
        return

    if result.reason == "conflict":
        status_code = 409
    elif result.reason == "error":
        status_code = 503
    else:
        status_code = 422

    raise HTTPException(
        status_code=status_code,
        detail={"reason": result.reason, "message": result.message}
    )


@router.post("/validate", response_model=SlotValidationResult)
async def validate_slot(
        request: SlotValidationRequest,
        db: Session = Depends(get_db)
):
    """
    Check a chosen time before submitting the booking.
    Always 200: the verdict is in ``ok`` / ``reason``.
    """
    return ConflictValidator.validate_slot(db, request)


@router.post("", response_model=AppointmentWriteResult, status_code=201)
async def create_appointment(
        payload: AppointmentCreateRequest,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    """Book an appointment for the calling client. It starts as pending."""
    result = AppointmentWriter.create(
        db=db,
        client_id=user_id,
        provider_id=payload.provider_id,
        service_id=payload.service_id,
        appointment_date=payload.appointment_date,
        appointment_time=payload.appointment_time,
        employee_id=payload.employee_id,
        notes=payload.notes
    )
    _raise_for_rejection(result)
    return result


@router.patch("/{appointment_id}/status", response_model=AppointmentRead)
async def update_appointment_status(
        payload: AppointmentStatusUpdate,
        appointment_id: str = Path(..., description="The appointment ID"),
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    """Confirm, cancel or complete an appointment"""
    try:
        appointment = AppointmentWriter.set_status(
            db=db,
            appointment_id=appointment_id,
            new_status=payload.status,
            requester_id=user_id
        )
    except AppointmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AppointmentPermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except IllegalTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except SQLAlchemyError:
        raise HTTPException(
            status_code=503,
            detail="We couldn't update this appointment right now. Please try again."
        )

    return appointment


@router.post("/{appointment_id}/reschedule", response_model=AppointmentWriteResult)
async def reschedule_appointment(
        payload: AppointmentRescheduleRequest,
        appointment_id: str = Path(..., description="The appointment ID"),
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    """Move an appointment to another time. It goes back to pending."""
    try:
        result = AppointmentWriter.reschedule(
            db=db,
            appointment_id=appointment_id,
            new_date=payload.appointment_date,
            new_time=payload.appointment_time,
            requester_id=user_id
        )
    except AppointmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AppointmentPermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except IllegalTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    _raise_for_rejection(result)
    return result
