"""
Reminder database model
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Enum, DateTime, ForeignKey, Text, Boolean, JSON
from app.core.database import Base
from app.models.enums import ReminderType, ReminderChannel


class Reminder(Base):
    """Composed reminder message waiting to be (or already) delivered."""
    __tablename__ = "reminders"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    client_id = Column(String(64), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    appointment_id = Column(String(64), nullable=True, index=True)
    type = Column(Enum(ReminderType), nullable=False)
    message = Column(Text, nullable=False)
    scheduled_for = Column(DateTime, nullable=False)
    sent = Column(Boolean, default=False, nullable=False)
    sent_at = Column(DateTime, nullable=True)
    channel = Column(Enum(ReminderChannel), default=ReminderChannel.EMAIL, nullable=False)
    document_ids = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __init__(self, **kwargs):
        kwargs.setdefault("sent", False)
        super().__init__(**kwargs)

    def __repr__(self):
        return f"<Reminder(id={self.id}, type={self.type.value}, sent={self.sent})>"
