# ===== salon_booking/models/availability.py =====
from sqlalchemy import Column, String, Integer, Boolean, Time, ForeignKey
from salon_booking.models.base import Base, generate_uuid


class Availability(Base):
    """Provider weekly opening hours, one row per enabled weekday"""
    __tablename__ = "availabilities"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    provider_id = Column(String(36), ForeignKey("providers.id", ondelete="CASCADE"), index=True)

    weekday = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    is_active = Column(Boolean, default=True)


class EmployeeAvailability(Base):
    """Employee weekly hours, only consulted when custom_schedule_enabled"""
    __tablename__ = "employee_availabilities"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    employee_id = Column(String(36), ForeignKey("employees.id", ondelete="CASCADE"), index=True)

    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    is_available = Column(Boolean, default=True)
