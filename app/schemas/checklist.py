"""
Checklist Pydantic schemas
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from app.models.enums import DocumentCategory


class ChecklistItemResponse(BaseModel):
    """Schema for individual checklist item"""
    id: str = Field(..., description="ChecklistItem UUID, regenerated with the checklist")
    document_key: str = Field(..., description="Stable template key")
    name: str
    description: str
    category: DocumentCategory
    required: bool
    collected: bool
    source: Optional[str] = None
    reminder_sent: bool
    reminder_sent_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ChecklistProgress(BaseModel):
    """Counts over required items only"""
    required_total: int
    collected: int
    pending: int
    percent_complete: float = Field(..., ge=0.0, le=100.0)


class ChecklistResponse(BaseModel):
    """Schema for a client's full checklist"""
    client_id: str
    generated_at: datetime
    last_updated: datetime
    items: List[ChecklistItemResponse]
    progress: ChecklistProgress
