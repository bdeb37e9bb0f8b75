"""
Shared result schemas
"""
from typing import Optional
from pydantic import BaseModel, Field


class OperationResult(BaseModel):
    """Outcome of an operation whose failures are reported, not raised"""
    success: bool
    message: str
    error_code: Optional[str] = Field(None, description="not_found, invalid_state or exhausted when success is false")
