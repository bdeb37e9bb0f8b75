"""
Error taxonomy for the intake and routing services.
"""

from typing import Any, Dict, Optional
from starlette.status import HTTP_404_NOT_FOUND, HTTP_409_CONFLICT, HTTP_500_INTERNAL_SERVER_ERROR


class IntakeServiceError(Exception):
    """Base exception for all intake and routing errors."""

    error_code = "error"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(IntakeServiceError):
    """Raised when a client, session, checklist, appointment, reminder or staff id does not resolve."""
    error_code = "not_found"


class InvalidStateError(IntakeServiceError):
    """Raised when an operation does not apply to the entity's current state."""
    error_code = "invalid_state"


class ExhaustedError(IntakeServiceError):
    """Raised when no staff member is left to take the client."""
    error_code = "exhausted"


EXCEPTION_STATUS = {
    NotFoundError: HTTP_404_NOT_FOUND,
    InvalidStateError: HTTP_409_CONFLICT,
    ExhaustedError: HTTP_409_CONFLICT,
}


def status_code_for(exc: IntakeServiceError) -> int:
    """HTTP status for a service exception."""
    return EXCEPTION_STATUS.get(type(exc), HTTP_500_INTERNAL_SERVER_ERROR)
