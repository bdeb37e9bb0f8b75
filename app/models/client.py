"""
Client database model
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Enum, DateTime, Boolean, Integer, JSON
from app.core.database import Base
from app.models.enums import FilingStatus


class Client(Base):
    """
    Client profile built up incrementally by the intake script.

    Multi-valued attributes live in JSON columns and are always replaced
    with a new list on update so the ORM picks up the change.

    - documents_collected holds checklist document keys
    - documents_pending holds checklist item ids of required, uncollected documents
    """
    __tablename__ = "clients"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    first_name = Column(String, default="", nullable=False)
    last_name = Column(String, default="", nullable=False)
    email = Column(String, default="", nullable=False, index=True)
    phone = Column(String, default="", nullable=False)
    date_of_birth = Column(String, nullable=True)
    address = Column(JSON, nullable=True)
    filing_status = Column(Enum(FilingStatus), default=FilingStatus.SINGLE, nullable=False)
    dependents = Column(JSON, default=list, nullable=False)
    employment_info = Column(JSON, default=list, nullable=False)
    income_types = Column(JSON, default=list, nullable=False)
    deductions = Column(JSON, default=list, nullable=False)
    has_health_insurance = Column(Boolean, default=False, nullable=False)
    has_crypto = Column(Boolean, default=False, nullable=False)
    has_foreign_accounts = Column(Boolean, default=False, nullable=False)
    has_rental_property = Column(Boolean, default=False, nullable=False)
    has_business_income = Column(Boolean, default=False, nullable=False)
    documents_collected = Column(JSON, default=list, nullable=False)
    documents_pending = Column(JSON, default=list, nullable=False)
    complexity_score = Column(Integer, default=0, nullable=False)
    assigned_tax_pro_id = Column(String(64), nullable=True)
    appointment_id = Column(String(64), nullable=True)
    intake_completed = Column(Boolean, default=False, nullable=False)
    intake_completed_at = Column(DateTime, nullable=True)
    notes = Column(JSON, default=list, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __init__(self, **kwargs):
        # Column defaults only apply on INSERT; scoring works on unsaved profiles too
        for field in ("dependents", "employment_info", "income_types", "deductions",
                      "documents_collected", "documents_pending", "notes"):
            kwargs.setdefault(field, [])
        for flag in ("has_health_insurance", "has_crypto", "has_foreign_accounts",
                     "has_rental_property", "has_business_income", "intake_completed"):
            kwargs.setdefault(flag, False)
        kwargs.setdefault("filing_status", FilingStatus.SINGLE)
        kwargs.setdefault("complexity_score", 0)
        super().__init__(**kwargs)

    def __repr__(self):
        return f"<Client(id={self.id}, name={self.full_name!r}, score={self.complexity_score})>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
