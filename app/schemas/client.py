"""
Client Pydantic schemas
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, EmailStr, Field
from app.models.enums import DeductionType, FilingStatus, IncomeType


class ClientCreate(BaseModel):
    """Schema for creating a client profile outside the intake script"""
    first_name: str = Field("", max_length=255)
    last_name: str = Field("", max_length=255)
    email: Optional[EmailStr] = Field(None, description="Client email address")
    phone: str = Field("", max_length=32)
    date_of_birth: Optional[str] = None
    filing_status: FilingStatus = FilingStatus.SINGLE
    dependents: List[Dict[str, Any]] = Field(default_factory=list)
    income_types: List[IncomeType] = Field(default_factory=list)
    deductions: List[DeductionType] = Field(default_factory=list)
    has_health_insurance: bool = False
    has_crypto: bool = False
    has_foreign_accounts: bool = False
    has_rental_property: bool = False
    has_business_income: bool = False


class ClientResponse(BaseModel):
    """Schema for client response"""
    id: str = Field(..., description="Client UUID")
    first_name: str
    last_name: str
    email: str
    phone: str
    date_of_birth: Optional[str] = None
    address: Optional[Dict[str, Any]] = None
    filing_status: FilingStatus
    dependents: List[Dict[str, Any]]
    employment_info: List[Dict[str, Any]]
    income_types: List[str]
    deductions: List[str]
    has_health_insurance: bool
    has_crypto: bool
    has_foreign_accounts: bool
    has_rental_property: bool
    has_business_income: bool
    documents_collected: List[str] = Field(..., description="Collected document keys")
    documents_pending: List[str] = Field(..., description="Checklist item ids still required")
    complexity_score: int = Field(..., ge=0, le=100)
    assigned_tax_pro_id: Optional[str] = None
    appointment_id: Optional[str] = None
    intake_completed: bool
    intake_completed_at: Optional[datetime] = None
    notes: List[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
