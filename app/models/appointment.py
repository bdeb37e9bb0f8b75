"""
Appointment database model
"""
import uuid
from sqlalchemy import Column, String, Integer, Enum, DateTime, ForeignKey, Text
from app.core.database import Base
from app.models.enums import AppointmentStatus, AppointmentType, ComplexityLevel


class Appointment(Base):
    """
    Meeting between a client and a tax professional.

    intake_score and estimated_complexity are snapshots taken at booking time;
    later changes to the client do not touch them.
    """
    __tablename__ = "appointments"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    client_id = Column(String(64), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    tax_pro_id = Column(String(64), ForeignKey("tax_professionals.id"), nullable=False, index=True)
    scheduled_at = Column(DateTime, nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    status = Column(Enum(AppointmentStatus), default=AppointmentStatus.SCHEDULED, nullable=False)
    type = Column(Enum(AppointmentType), default=AppointmentType.VIRTUAL, nullable=False)
    notes = Column(Text, nullable=True)
    intake_score = Column(Integer, default=0, nullable=False)
    estimated_complexity = Column(Enum(ComplexityLevel), nullable=False)

    def __repr__(self):
        return f"<Appointment(id={self.id}, client_id={self.client_id}, tax_pro_id={self.tax_pro_id}, duration={self.duration})>"
