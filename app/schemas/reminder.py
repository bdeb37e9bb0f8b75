"""
Reminder Pydantic schemas
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel
from app.models.enums import ReminderChannel, ReminderType


class ReminderResponse(BaseModel):
    """Schema for reminder response"""
    id: str
    client_id: str
    appointment_id: Optional[str] = None
    type: ReminderType
    message: str
    scheduled_for: datetime
    sent: bool
    sent_at: Optional[datetime] = None
    channel: ReminderChannel
    document_ids: Optional[List[str]] = None
    created_at: datetime

    class Config:
        from_attributes = True
