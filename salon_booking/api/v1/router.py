"""
API v1 router setup
Identity comes from the upstream auth layer via the X-User-ID header
"""
from fastapi import APIRouter

from salon_booking.api.v1 import appointments, employees, providers, slots

api_v1_router = APIRouter()

# ============================================================================
# BOOKING ROUTES (clients)
# ============================================================================
api_v1_router.include_router(slots.router)
api_v1_router.include_router(appointments.router)

# ============================================================================
# PROVIDER ROUTES (provider owner / employees)
# ============================================================================
api_v1_router.include_router(providers.router)
api_v1_router.include_router(employees.router)


@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """API information and available endpoint groups."""
    return {
        "version": "1.0",
        "authentication": "X-User-ID header set by the upstream auth layer",
        "groups": {
            "slots": "/providers/{provider_id}/slots",
            "appointments": "/appointments",
            "providers": "/providers/{provider_id}",
            "employees": "/employees/{employee_id}",
        }
    }
