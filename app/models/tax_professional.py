"""
TaxProfessional database model
"""
from sqlalchemy import Column, String, Integer, Enum, Boolean, Float, JSON
from app.core.database import Base
from app.models.enums import ComplexityLevel


class TaxProfessional(Base):
    """
    Staff member who can be assigned clients.

    Seeded from the staff directory at startup. Only current_load changes at
    runtime, and routing never pushes it past max_daily_appointments.
    """
    __tablename__ = "tax_professionals"

    id = Column(String(64), primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    specializations = Column(JSON, default=list, nullable=False)
    max_complexity = Column(Enum(ComplexityLevel), nullable=False)
    current_load = Column(Integer, default=0, nullable=False)
    max_daily_appointments = Column(Integer, nullable=False)
    available = Column(Boolean, default=True, nullable=False)
    rating = Column(Float, default=0.0, nullable=False)

    def __repr__(self):
        return f"<TaxProfessional(id={self.id}, name={self.name}, load={self.current_load}/{self.max_daily_appointments})>"

    @property
    def has_capacity(self) -> bool:
        return self.current_load < self.max_daily_appointments

    @property
    def remaining_slots(self) -> int:
        return max(0, self.max_daily_appointments - self.current_load)
