# ===== salon_booking/models/notification.py =====
from sqlalchemy import Column, String, Integer, Boolean, Text, JSON, DateTime, ForeignKey
from sqlalchemy.sql import func
from salon_booking.models.base import Base, generate_uuid


class Notification(Base):
    """In-app notification shown in the user's notification bell"""
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), nullable=False, index=True)
    appointment_id = Column(String(36), ForeignKey("appointments.id"), nullable=True)

    event = Column(String(50), nullable=False)  # created, confirmed, cancelled, rescheduled, reminder
    title = Column(String(200), nullable=False)
    body = Column(Text, nullable=False)
    data = Column(JSON, default=dict)

    is_read = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class AppointmentReminderLog(Base):
    """One row per reminder sent, so each appointment is reminded once per channel"""
    __tablename__ = "appointment_reminder_logs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    appointment_id = Column(String(36), ForeignKey("appointments.id"), nullable=False, index=True)
    provider_id = Column(String(36), nullable=False)
    client_id = Column(String(36), nullable=False)
    channel = Column(String(20), nullable=False, default="in_app")
    lead_minutes = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
