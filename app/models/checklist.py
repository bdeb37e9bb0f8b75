"""
DocumentChecklist database model
"""
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base


class DocumentChecklist(Base):
    """
    Personalized document checklist, one per client.

    Regeneration replaces the whole checklist (items included); it is never merged.
    Progress figures only count required items.
    """
    __tablename__ = "document_checklists"

    client_id = Column(String(64), ForeignKey("clients.id", ondelete="CASCADE"), primary_key=True)
    generated_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_updated = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    items = relationship(
        "ChecklistItem",
        back_populates="checklist",
        cascade="all, delete-orphan",
        order_by="ChecklistItem.position",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<DocumentChecklist(client_id={self.client_id}, items={len(self.items)})>"

    @property
    def required_items(self) -> list:
        return [item for item in self.items if item.required]

    @property
    def pending_items(self) -> list:
        return [item for item in self.items if item.is_pending]

    @property
    def progress_percentage(self) -> float:
        """Share of required documents collected"""
        required = self.required_items
        if not required:
            return 100.0
        collected = sum(1 for item in required if item.collected)
        return (collected / len(required)) * 100
