"""Error Hierarchy: typed, categorized exceptions for all Fic.AI Signals failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages: authentication and
      upstream failures carry a fixed message whatever the underlying cause

Design Decisions:
    - Single hierarchy with FicAiError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability data that is logged, never serialized
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    account_id: int | None = None
    url: str | None = None
    debug_info: dict[str, Any] | None = None


class FicAiError(Exception):
    """Base exception for all Fic.AI Signals errors."""

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
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(FicAiError):
    """Request body or query failed validation."""
    def __init__(
        self,
        message: str,
        field: str | None = None,
        code: str = "VALIDATION_ERROR",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class InvalidBetaKeyError(ValidationError):
    """Registration attempted with a wrong beta access key."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid beta key", field="betaKey",
            code="INVALID_BETA_KEY", context=context,
        )


class AuthenticationError(FicAiError):
    """Missing/invalid session or bad login credentials.

    The message never varies: unknown email, wrong password, missing cookie
    and unknown token all look the same to the caller.
    """
    MESSAGE = "Authentication required"

    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            self.MESSAGE, "FORBIDDEN", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ConflictError(FicAiError):
    """An account with this email already exists."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An account with this email already exists",
            "ACCOUNT_ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class UpstreamError(FicAiError):
    """Fic metadata lookup failed: not found, bad response, or timed out."""
    MESSAGE = "Failed to resolve fic metadata"

    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            self.MESSAGE, "UPSTREAM_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 500,
        )
        # kept for logs only
        self.reason = reason


class DatabaseError(FicAiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "An unexpected error occurred",
            "INTERNAL_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.detail = message
        self.operation = operation
