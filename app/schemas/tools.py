"""
Command-tool protocol schemas
"""
from typing import Any, Dict, List
from pydantic import BaseModel, Field


class ToolDescription(BaseModel):
    name: str
    description: str
    input_schema: Dict[str, Any]


class ToolCall(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


class TextContent(BaseModel):
    type: str = "text"
    text: str


class ToolResult(BaseModel):
    content: List[TextContent]
    is_error: bool = False


class PromptDescription(BaseModel):
    name: str
    description: str
    arguments: List[Dict[str, Any]] = Field(default_factory=list)


class PromptResponse(BaseModel):
    name: str
    description: str
    text: str
