"""
Base exception classes for the Splitwise backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any, Iterable


class SplitwiseError(Exception):
    """
    Base exception for all Splitwise errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(SplitwiseError):
    """Resource not found."""

    pass


class ValidationError(SplitwiseError):
    """Input validation failed."""

    @classmethod
    def from_errors(cls, errors: Iterable[dict[str, Any]]) -> "ValidationError":
        """
        Build a single error listing every violated constraint.

        Accepts pydantic-style error dicts (``loc``/``msg``). The leading
        ``body`` segment FastAPI adds to request errors is dropped.
        """
        violations = []
        for error in errors:
            loc = [str(part) for part in error.get("loc", ()) if part != "body"]
            violations.append({
                "field": ".".join(loc) or None,
                "message": error.get("msg", "Invalid value"),
            })
        return cls(
            "Validation error",
            code="VALIDATION_ERROR",
            details={"errors": violations},
        )


class ConflictError(SplitwiseError):
    """Request conflicts with existing state."""

    pass


class AuthenticationError(SplitwiseError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class ConfigurationError(SplitwiseError):
    """Process configuration is missing or unusable. Fatal at startup."""

    pass


class ExternalServiceError(SplitwiseError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
