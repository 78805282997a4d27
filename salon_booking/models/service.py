# salon_booking/models/service.py
"""
Service Model - bookable services offered by a provider.
Duration is the only field the scheduling core reads.
"""
from sqlalchemy import Column, String, Integer, ForeignKey, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from salon_booking.models.base import Base, generate_uuid


class Service(Base):
    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    provider_id = Column(
        String(36),
        ForeignKey("providers.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name = Column(String(200), nullable=False)
    duration_minutes = Column(Integer, nullable=True)

    is_active = Column(Boolean, default=True, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    provider = relationship("Provider", back_populates="services")

    def __repr__(self):
        return f"<Service(id={self.id}, name={self.name}, provider_id={self.provider_id})>"
