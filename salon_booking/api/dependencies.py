# ============================================================================
# salon_booking/api/dependencies.py
# Caller identity and ownership checks shared by the v1 routes
# ============================================================================
from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session
from typing import Optional

from salon_booking.config.database import get_db
from salon_booking.models.employee import Employee
from salon_booking.models.provider import Provider


# ============================================================================
# Identity
# ============================================================================

async def get_current_user_id(
        x_user_id: Optional[str] = Header(None, alias="X-User-ID")
) -> str:
    """
    The upstream auth layer resolves the session and forwards the user id.
    Requests that reach us without it are rejected.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-ID header"
        )
    return x_user_id.strip()


# ============================================================================
# Ownership
# ============================================================================

def require_provider_owner(db: Session, provider_id: str, user_id: str) -> Provider:
    provider = db.query(Provider).filter(Provider.id == provider_id).first()
    if not provider:
        raise HTTPException(status_code=404, detail="Provider not found")
    if provider.user_id != user_id:
        raise HTTPException(status_code=403, detail="You don't manage this provider")
    return provider


def require_employee_manager(db: Session, employee_id: str, user_id: str) -> Employee:
    """The provider owner, or the employee themself, may edit an employee's hours"""
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")

    if employee.user_id and employee.user_id == user_id:
        return employee

    require_provider_owner(db, employee.provider_id, user_id)
    return employee


async def get_provider_for_owner(
        provider_id: str,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
) -> Provider:
    return require_provider_owner(db, provider_id, user_id)
