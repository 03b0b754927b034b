"""Error Hierarchy — typed, categorized exceptions for all user-service failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() produces the REST envelope {"message": ...}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with UserServiceError base: FastAPI global handler catches all
    - Only not-found (404), conflict (409) and the request-boundary errors
      (400/422) leave the 500 default; bad cursors, timeouts and database
      failures all surface as 500
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BAD_INPUT = "bad_input"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Context attached to an error for logging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    debug_info: dict[str, Any] | None = None


class UserServiceError(Exception):
    """Base exception for all user-service errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to REST error body."""
        return {"message": self.message}


# ─── Request Boundary Errors ────────────────────────────────────

class InvalidRequestBodyError(UserServiceError):
    """Request body could not be bound (malformed JSON or wrong field types)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNPROCESSABLE_BODY", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 422,
        )


class RequestValidationFailedError(UserServiceError):
    """Bound request body is missing required fields."""
    def __init__(self, missing_fields: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Missing required fields: {', '.join(missing_fields)}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.missing_fields = missing_fields


# ─── Domain Errors ──────────────────────────────────────────────

class InvalidCursorError(UserServiceError):
    """Pagination cursor is not a token this service issued."""
    def __init__(self, cursor: str, context: ErrorContext | None = None):
        super().__init__(
            "Given cursor is not valid",
            "BAD_PARAM_INPUT", ErrorCategory.BAD_INPUT,
            ErrorSeverity.WARNING, context, 500,
        )
        self.cursor = cursor


class ResourceNotFoundError(UserServiceError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class EmailConflictError(UserServiceError):
    """Signup attempted with an email that is already registered."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(
            "User with this email already exists",
            "EMAIL_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.email = email


# ─── Infrastructure Errors (500-level) ──────────────────────────

class UnexpectedAffectedRowsError(UserServiceError):
    """A single-row write touched zero or several rows."""
    def __init__(
        self, operation: str, affected: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Unexpected behavior on {operation}. Total affected: {affected}",
            "UNEXPECTED_AFFECTED_ROWS", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
        self.affected = affected


class DeadlineExceededError(UserServiceError):
    """Use-case call did not finish within the per-request timeout."""
    def __init__(self, timeout_seconds: float, context: ErrorContext | None = None):
        super().__init__(
            f"Request exceeded the {timeout_seconds:g}s deadline",
            "DEADLINE_EXCEEDED", ErrorCategory.TIMEOUT,
            ErrorSeverity.ERROR, context, 500,
        )
        self.timeout_seconds = timeout_seconds


class DatabaseError(UserServiceError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
