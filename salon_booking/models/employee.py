# ===== salon_booking/models/employee.py =====
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from salon_booking.models.base import Base, generate_uuid


class Employee(Base):
    __tablename__ = "employees"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    provider_id = Column(
        String(36),
        ForeignKey("providers.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    user_id = Column(String(36), nullable=True)  # Set once the invite is accepted
    name = Column(String(200), nullable=False)

    # When False the employee works the provider's hours
    custom_schedule_enabled = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    provider = relationship("Provider", back_populates="employees")

    def __repr__(self):
        return f"<Employee(id={self.id}, name={self.name}, provider_id={self.provider_id})>"
