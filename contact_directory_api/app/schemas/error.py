"""
Error bodies returned by the exception handlers in ``core.errors``.
"""

from datetime import datetime
from typing import Dict

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    timestamp: datetime = Field(default_factory=datetime.now)
    status: int
    error: str
    message: str


class ValidationErrorResponse(ErrorResponse):
    """Error body for malformed input, with one message per field."""

    validationErrors: Dict[str, str] = Field(default_factory=dict)
