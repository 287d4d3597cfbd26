"""Error Hierarchy: typed, categorized exceptions for all FarmInvest failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400) list every failing field, not just the first
    - Internal errors (500) only expose their underlying cause when asked to
    - to_response() produces the REST envelope: {"error": str, ...}

Design Decisions:
    - Single hierarchy with FarmInvestError base: FastAPI global handler catches all
    - Flat envelope ("error" is a string) because mobile clients read
      error/details/message directly
"""

from datetime import datetime, timezone
from enum import Enum

from farminvest.core.validation import FieldViolation


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


class FarmInvestError(Exception):
    """Base exception for all FarmInvest errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.timestamp = datetime.now(timezone.utc)

    def to_response(self, expose_details: bool = False) -> dict:
        """Convert to standardized REST error response."""
        return {"error": self.message, "code": self.code}


# ─── Client-correctable (400-level) ─────────────────────────────

class InvestmentValidationError(FarmInvestError):
    """One or more investment fields failed validation."""
    def __init__(self, violations: list[FieldViolation]):
        super().__init__(
            "Validation failed", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.violations = violations

    @property
    def details(self) -> list[str]:
        return [v.message for v in self.violations]

    def to_response(self, expose_details: bool = False) -> dict:
        return {
            "error": self.message,
            "code": self.code,
            "details": self.details,
            "fields": [v.to_dict() for v in self.violations],
        }


class RouteNotFoundError(FarmInvestError):
    """No route matches the request path."""
    def __init__(self, path: str):
        super().__init__(
            "Route not found", "ROUTE_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO, 404,
        )
        self.path = path

    def to_response(self, expose_details: bool = False) -> dict:
        return {"error": self.message}


# ─── Internal (500-level) ───────────────────────────────────────

class InternalError(FarmInvestError):
    """Storage or unexpected failure; cause hidden unless exposed."""
    def __init__(
        self,
        message: str,
        cause: str | None = None,
        code: str = "INTERNAL_ERROR",
        category: ErrorCategory = ErrorCategory.INTERNAL,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.CRITICAL, 500,
        )
        self.cause = cause

    def to_response(self, expose_details: bool = False) -> dict:
        body = {"error": self.message, "code": self.code}
        if expose_details and self.cause:
            body["message"] = self.cause
        return body


class DatabaseError(InternalError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, cause: str | None = None):
        super().__init__(
            message, cause, "DATABASE_ERROR", ErrorCategory.DATABASE,
        )
        self.operation = operation
