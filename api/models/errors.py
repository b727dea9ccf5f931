"""
Error response models.

Standardized error responses for the API. Bodies are produced by
``SplitwiseError.to_dict()``.
"""

from typing import Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
    message: str
    details: dict[str, Any] = {}


class FieldError(BaseModel):
    """A single violated input constraint."""

    field: Optional[str] = None
    message: str


class ValidationErrorDetails(BaseModel):
    errors: list[FieldError]


class ValidationErrorResponse(BaseModel):
    """Validation error response format; lists every violation."""

    error: str = "VALIDATION_ERROR"
    message: str = "Validation error"
    details: ValidationErrorDetails
