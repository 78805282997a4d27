# ===== salon_booking/models/appointment.py =====
import enum

from sqlalchemy import Column, String, Integer, Text, Date, Time, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from salon_booking.models.base import Base, generate_uuid


class AppointmentStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    DONE = "done"


# Statuses that block the time range they cover
OCCUPYING_STATUSES = (AppointmentStatus.PENDING.value, AppointmentStatus.CONFIRMED.value)


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        Index("ix_appointments_provider_date_status", "provider_id", "appointment_date", "status"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)

    # References
    client_id = Column(String(36), nullable=False, index=True)
    provider_id = Column(String(36), ForeignKey("providers.id"), nullable=False)
    service_id = Column(String(36), ForeignKey("services.id"), nullable=False)
    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=True, index=True)

    # Appointment details (provider-local wall clock)
    appointment_date = Column(Date, nullable=False)
    appointment_time = Column(Time, nullable=False)
    duration_minutes = Column(Integer, nullable=True)  # Snapshot of the service duration at booking
    notes = Column(Text, nullable=True)

    # Status tracking
    status = Column(String(20), nullable=False, default=AppointmentStatus.PENDING.value)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return (
            f"<Appointment(id={self.id}, provider_id={self.provider_id}, "
            f"date={self.appointment_date}, time={self.appointment_time}, status={self.status})>"
        )
