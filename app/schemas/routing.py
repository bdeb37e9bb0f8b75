"""
Complexity and routing Pydantic schemas
"""
from typing import List, Optional
from pydantic import BaseModel, Field
from app.models.enums import ComplexityLevel


class TaxProResponse(BaseModel):
    """Schema for tax professional response"""
    id: str
    name: str
    email: str
    specializations: List[str]
    max_complexity: ComplexityLevel
    current_load: int
    max_daily_appointments: int
    available: bool
    rating: float = Field(..., ge=0.0, le=5.0)

    class Config:
        from_attributes = True


class ComplexityAssessment(BaseModel):
    """Read-only complexity breakdown for a client"""
    client_id: str
    score: int = Field(..., ge=0, le=100)
    level: ComplexityLevel
    required_specializations: List[str]
    interpretation: str


class RoutingResult(BaseModel):
    """Outcome of routing a client to a tax professional"""
    success: bool
    message: str
    tax_pro: Optional[TaxProResponse] = None
    alternates: List[TaxProResponse] = Field(default_factory=list)
    error_code: Optional[str] = None


class RecommendationResponse(BaseModel):
    """Markdown recommendation text plus the structured match"""
    client_id: str
    tax_pro: Optional[TaxProResponse] = None
    alternates: List[TaxProResponse] = Field(default_factory=list)
    message: str
