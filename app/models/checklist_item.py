"""
ChecklistItem database model
"""
import uuid
from sqlalchemy import Column, Integer, Enum, ForeignKey, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.enums import DocumentCategory


class ChecklistItem(Base):
    """
    One document a client is asked to bring.

    document_key points into the static template table and is stable across
    regenerations; id is generated fresh every time the checklist is rebuilt.
    position keeps the generator's sort order (required first, then category).
    """
    __tablename__ = "checklist_items"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    client_id = Column(String(64), ForeignKey("document_checklists.client_id", ondelete="CASCADE"), nullable=False, index=True)
    document_key = Column(String, nullable=False)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    category = Column(Enum(DocumentCategory), nullable=False)
    required = Column(Boolean, default=True, nullable=False)
    collected = Column(Boolean, default=False, nullable=False)
    source = Column(String, nullable=True)
    reminder_sent = Column(Boolean, default=False, nullable=False)
    reminder_sent_at = Column(DateTime, nullable=True)
    notes = Column(String, nullable=True)
    position = Column(Integer, default=0, nullable=False)

    # Relationships
    checklist = relationship("DocumentChecklist", back_populates="items")

    def __init__(self, **kwargs):
        kwargs.setdefault("id", str(uuid.uuid4()))
        kwargs.setdefault("collected", False)
        kwargs.setdefault("reminder_sent", False)
        super().__init__(**kwargs)

    def __repr__(self):
        return f"<ChecklistItem(id={self.id}, key={self.document_key}, required={self.required}, collected={self.collected})>"

    @property
    def is_pending(self) -> bool:
        """Required and not yet collected"""
        return self.required and not self.collected
