"""Error Hierarchy — typed, categorized exceptions for every devlink failure mode.

Invariants:
    - Every error has a code, category, severity and http_status
    - http_status < 500 means the caller can fix the request; >= 500 means it cannot
    - to_response() is the only shape errors take on the wire:
      {"error": {code, message, category, severity, timestamp[, details]}}
    - Messages are written for the caller; internal detail goes to logs only

Design Decisions:
    - Subclasses declare code/category/severity/http_status as class attributes;
      constructors only build the message
    - ConflictError answers 400, not 409: existing clients branch on 400 for
      duplicate registration and double like. 409 is reserved for lost write races.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


class DevLinkError(Exception):
    """Base exception for all devlink errors."""

    code = "INTERNAL_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.CRITICAL
    http_status = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.timestamp = datetime.now(timezone.utc)

    @property
    def is_client_error(self) -> bool:
        return self.http_status < 500

    def to_response(self) -> dict:
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.details is not None:
            body["details"] = self.details
        return {"error": body}


# ─── Caller errors (4xx) ────────────────────────────────────────

class RequestValidationFailed(DevLinkError):
    """Payload failed declarative field rules. Carries every violation."""
    code = "VALIDATION_ERROR"
    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.WARNING
    http_status = 400

    def __init__(self, violations: list[dict]):
        super().__init__("Invalid request data", details=violations)
        self.violations = violations


class UnauthenticatedError(DevLinkError):
    """Credential missing, malformed, forged or expired."""
    code = "UNAUTHENTICATED"
    category = ErrorCategory.AUTHENTICATION
    severity = ErrorSeverity.WARNING
    http_status = 401


class InvalidCredentialsError(DevLinkError):
    """Login with unknown e-mail or wrong password. Both look the same."""
    code = "INVALID_CREDENTIALS"
    category = ErrorCategory.AUTHENTICATION
    severity = ErrorSeverity.WARNING
    http_status = 400

    def __init__(self):
        super().__init__("Invalid credentials")


class ForbiddenError(DevLinkError):
    """Authenticated caller does not own the target document."""
    code = "FORBIDDEN"
    category = ErrorCategory.AUTHORIZATION
    severity = ErrorSeverity.WARNING
    http_status = 403

    def __init__(self, message: str = "User not authorized"):
        super().__init__(message)


class ResourceNotFoundError(DevLinkError):
    """Requested document or sub-record does not exist."""
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    severity = ErrorSeverity.WARNING
    http_status = 404

    def __init__(
        self, resource_type: str, resource_id: str, message: str | None = None,
    ):
        super().__init__(message or f"{resource_type} '{resource_id}' not found")
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(DevLinkError):
    """Operation contradicts current state (duplicate user, double like/unlike)."""
    category = ErrorCategory.CONFLICT
    severity = ErrorSeverity.WARNING
    http_status = 400

    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message)
        self.code = code


class ConcurrencyError(DevLinkError):
    """Version check failed on commit: another writer got there first. Retryable."""
    code = "CONCURRENCY_CONFLICT"
    category = ErrorCategory.CONFLICT
    severity = ErrorSeverity.ERROR
    http_status = 409


# ─── Infrastructure errors (5xx) ────────────────────────────────

class DatabaseError(DevLinkError):
    category = ErrorCategory.DATABASE
    code = "DATABASE_ERROR"
    http_status = 503

    def __init__(self, message: str, operation: str):
        super().__init__(f"Database {operation} failed: {message}")
        self.operation = operation


class StorageTimeoutError(DevLinkError):
    code = "STORAGE_TIMEOUT"
    category = ErrorCategory.TIMEOUT
    http_status = 504

    def __init__(self, operation: str, timeout_seconds: float):
        super().__init__(f"Storage {operation} timed out after {timeout_seconds}s")
        self.operation = operation


class ExternalServiceError(DevLinkError):
    code = "EXTERNAL_SERVICE_ERROR"
    category = ErrorCategory.EXTERNAL_API
    http_status = 503

    def __init__(self, service: str, message: str):
        super().__init__(f"{service} request failed: {message}")
        self.service = service


class InternalError(DevLinkError):
    """Unexpected failure. The message is fixed so nothing internal reaches the caller."""

    def __init__(self):
        super().__init__("Server error")
