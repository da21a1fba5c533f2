"""Error Hierarchy — typed, categorized exceptions for all lahlah server failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Database errors carry an actionable hint and the driver's numeric code when known
    - to_response() produces the REST envelope used by the global handlers
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
    CONFIGURATION = "configuration"
    CONNECTION = "connection"
    ACCESS = "access"
    SCHEMA = "schema"
    DATABASE = "database"
    CAPACITY = "capacity"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    database: str | None = None
    host: str | None = None
    statement: str | None = None
    debug_info: dict[str, Any] | None = None


class LahlahError(Exception):
    """Base exception for all lahlah server errors."""

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
            "error": self.message,
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }


class ConfigError(LahlahError):
    """Settings are structurally invalid (e.g. non-numeric port)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFIG_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class InternalServerError(LahlahError):
    """Unclassified failure inside an HTTP handler."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, context, 500,
        )


# ─── Database Errors ────────────────────────────────────────────

class DatabaseError(LahlahError):
    """Database operation failed and matched no more specific class."""

    default_code = "DATABASE_ERROR"
    default_category = ErrorCategory.DATABASE
    default_hint: str | None = None

    def __init__(
        self,
        message: str,
        driver_code: int | None = None,
        hint: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, self.default_code, self.default_category,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.driver_code = driver_code
        self.hint = hint if hint is not None else self.default_hint

    def to_response(self) -> dict:
        body = super().to_response()
        body["hint"] = self.hint
        return body


class DatabaseConnectionError(DatabaseError):
    """The database host could not be reached (refused, unknown host, dropped)."""
    default_code = "ECONNREFUSED"
    default_category = ErrorCategory.CONNECTION
    default_hint = (
        "MySQL server might be offline. Check that the database service "
        "is running and that DB_HOST/DB_PORT point to it."
    )


class DatabaseAccessError(DatabaseError):
    """Authentication against the database server failed."""
    default_code = "ER_ACCESS_DENIED_ERROR"
    default_category = ErrorCategory.ACCESS
    default_hint = "Check DB_USER and DB_PASSWORD in the environment or .env.local."


class SchemaError(DatabaseError):
    """The named database does not exist or is misconfigured."""
    default_code = "ER_BAD_DB_ERROR"
    default_category = ErrorCategory.SCHEMA
    default_hint = (
        "The database name might be wrong or it does not exist. "
        "Check DB_NAME or run lahlah-init-db to create it."
    )


class PoolExhaustedError(DatabaseError):
    """Every pooled connection is checked out and the caller may not wait."""
    default_code = "POOL_EXHAUSTED"
    default_category = ErrorCategory.CAPACITY
    default_hint = (
        "All pooled connections are busy. Raise DB_CONNECTION_LIMIT or "
        "DB_QUEUE_LIMIT, or enable DB_WAIT_FOR_CONNECTIONS."
    )


class BootstrapError(LahlahError):
    """Database bootstrap failed at one of its steps."""
    def __init__(
        self, message: str, step: str, cause: DatabaseError | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Bootstrap step '{step}' failed: {message}",
            "BOOTSTRAP_FAILED", ErrorCategory.SCHEMA,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.step = step
        self.cause = cause
        self.hint = cause.hint if cause else None
