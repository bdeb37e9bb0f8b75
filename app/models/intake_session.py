"""
IntakeSession database model
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Enum, DateTime, ForeignKey, JSON
from app.core.database import Base
from app.models.enums import IntakeStep, SessionStatus


class IntakeSession(Base):
    """
    One pass through the intake script for a client.

    Status transitions: in_progress → completed (script reaches the complete step)
                        in_progress → abandoned
    responses is an ordered list of {step, question, answer, timestamp} records.
    """
    __tablename__ = "intake_sessions"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    client_id = Column(String(64), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    started_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_activity_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    current_step = Column(Enum(IntakeStep), default=IntakeStep.PERSONAL_INFO, nullable=False)
    completed_steps = Column(JSON, default=list, nullable=False)
    responses = Column(JSON, default=list, nullable=False)
    status = Column(Enum(SessionStatus), default=SessionStatus.IN_PROGRESS, nullable=False)

    def __init__(self, **kwargs):
        kwargs.setdefault("current_step", IntakeStep.PERSONAL_INFO)
        kwargs.setdefault("completed_steps", [])
        kwargs.setdefault("responses", [])
        kwargs.setdefault("status", SessionStatus.IN_PROGRESS)
        super().__init__(**kwargs)

    def __repr__(self):
        return f"<IntakeSession(id={self.id}, step={self.current_step.value}, status={self.status.value})>"

    def answers_for(self, step: IntakeStep) -> list:
        """Recorded responses for one step"""
        return [r for r in self.responses if r["step"] == step.value]
