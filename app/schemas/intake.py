"""
Intake Pydantic schemas
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from app.models.enums import IntakeStep, SessionStatus


class IntakeStart(BaseModel):
    """Start a new intake, or resume the client's in-progress one"""
    client_id: Optional[str] = Field(None, description="Existing client to resume; omit to create a new client")


class IntakeAnswer(BaseModel):
    """Free-text answer to the current question"""
    answer: str = Field(..., description="Client's answer")


class IntakeSessionResponse(BaseModel):
    """Schema for intake session response"""
    id: str = Field(..., description="Session UUID")
    client_id: str
    started_at: datetime
    last_activity_at: datetime
    current_step: IntakeStep
    completed_steps: List[str]
    responses: List[Dict[str, Any]]
    status: SessionStatus

    class Config:
        from_attributes = True


class IntakeTurn(BaseModel):
    """What the client should see after starting or answering"""
    session_id: str
    client_id: str
    current_step: IntakeStep
    status: SessionStatus
    message: str = Field(..., description="Next question, or the completion message")
    completed: bool = False


class IntakeProgress(BaseModel):
    """Progress through the intake script"""
    session_id: str
    current_step: IntakeStep
    completed_steps: List[str]
    remaining_steps: List[str]
    total_steps: int
    percent_complete: int = Field(..., ge=0, le=100)
    status: SessionStatus
