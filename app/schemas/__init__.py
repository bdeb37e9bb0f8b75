"""
Pydantic schemas for request/response validation
"""
from app.schemas.common import OperationResult
from app.schemas.client import ClientCreate, ClientResponse
from app.schemas.intake import (
    IntakeStart,
    IntakeAnswer,
    IntakeSessionResponse,
    IntakeTurn,
    IntakeProgress,
)
from app.schemas.checklist import ChecklistItemResponse, ChecklistProgress, ChecklistResponse
from app.schemas.routing import (
    TaxProResponse,
    ComplexityAssessment,
    RoutingResult,
    RecommendationResponse,
)
from app.schemas.appointment import AppointmentCreate, AppointmentResponse, AppointmentEstimate
from app.schemas.reminder import ReminderResponse
from app.schemas.tools import (
    ToolDescription,
    ToolCall,
    TextContent,
    ToolResult,
    PromptDescription,
    PromptResponse,
)

__all__ = [
    "OperationResult",
    "ClientCreate",
    "ClientResponse",
    "IntakeStart",
    "IntakeAnswer",
    "IntakeSessionResponse",
    "IntakeTurn",
    "IntakeProgress",
    "ChecklistItemResponse",
    "ChecklistProgress",
    "ChecklistResponse",
    "TaxProResponse",
    "ComplexityAssessment",
    "RoutingResult",
    "RecommendationResponse",
    "AppointmentCreate",
    "AppointmentResponse",
    "AppointmentEstimate",
    "ReminderResponse",
    "ToolDescription",
    "ToolCall",
    "TextContent",
    "ToolResult",
    "PromptDescription",
    "PromptResponse",
]
