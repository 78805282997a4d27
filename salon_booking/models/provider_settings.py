# ===== salon_booking/models/provider_settings.py =====
from sqlalchemy import Column, String, Integer, Boolean, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from salon_booking.models.base import Base, generate_uuid


class ProviderSettings(Base):
    """Per-provider scheduling policy (buffers, overlaps, reminders)"""
    __tablename__ = "provider_settings"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    provider_id = Column(
        String(36),
        ForeignKey("providers.id", ondelete="CASCADE"),
        nullable=False,
        unique=True
    )

    buffer_before_minutes = Column(Integer, nullable=True)
    buffer_after_minutes = Column(Integer, nullable=True)
    allow_overlaps = Column(Boolean, default=False)
    cancellation_policy_hours = Column(Integer, nullable=True)
    cancellation_policy_message = Column(Text, nullable=True)
    reminder_lead_time_minutes = Column(Integer, nullable=True)

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
