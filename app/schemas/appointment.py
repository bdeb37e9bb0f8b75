"""
Appointment Pydantic schemas
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
from app.models.enums import AppointmentStatus, AppointmentType, ComplexityLevel


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment"""
    client_id: str
    tax_pro_id: str
    scheduled_at: datetime
    type: Optional[AppointmentType] = Field(None, description="Defaults to the configured appointment type")


class AppointmentResponse(BaseModel):
    """Schema for appointment response"""
    id: str
    client_id: str
    tax_pro_id: str
    scheduled_at: datetime
    duration: int = Field(..., description="Minutes")
    status: AppointmentStatus
    type: AppointmentType
    notes: Optional[str] = None
    intake_score: int
    estimated_complexity: ComplexityLevel

    class Config:
        from_attributes = True


class AppointmentEstimate(BaseModel):
    """Standard vs. optimized duration for the client's current tier"""
    client_id: str
    complexity_level: ComplexityLevel
    intake_completed: bool
    standard_duration: int
    optimized_duration: int
    estimated_duration: int
    savings: int = Field(..., description="Minutes saved; zero until intake is complete")
    message: str
