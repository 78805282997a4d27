# ===== salon_booking/models/provider.py =====
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from salon_booking.models.base import Base, generate_uuid


class Provider(Base):
    """A business (salon, barber, studio) that offers bookable services"""
    __tablename__ = "providers"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), nullable=False, index=True)  # Owner account
    business_name = Column(String(200), nullable=False)
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employees = relationship("Employee", back_populates="provider")
    services = relationship("Service", back_populates="provider")

    def __repr__(self):
        return f"<Provider(id={self.id}, business_name={self.business_name})>"
