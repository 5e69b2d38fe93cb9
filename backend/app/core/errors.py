"""Error Hierarchy: typed, categorized exceptions for every failure mode of the API.

Invariants:
    - Every error carries an ErrorKind; HTTP status is looked up by kind in
      HTTP_STATUS_BY_KIND, never derived from the message text
    - ValidationError always carries a non-empty list of FieldError
    - InternalError never exposes the underlying exception text to clients

Design Decisions:
    - Single hierarchy with AppError base: one global handler catches all
    - Severity drives the log level in the handler (4xx warn, 5xx error)
"""

from dataclasses import dataclass
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorKind(str, Enum):
    """Error categories used to route an error to an HTTP status."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    EXTERNAL_SERVICE = "external_service"
    DATABASE = "database"
    INTERNAL = "internal"


HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.EXTERNAL_SERVICE: 502,
    ErrorKind.DATABASE: 503,
    ErrorKind.INTERNAL: 500,
}

VALIDATION_ERROR_LABEL = "Validation error"


@dataclass(frozen=True)
class FieldError:
    """One violated rule: dotted field path (or "body") and a message."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class AppError(Exception):
    """Base exception for all API errors."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.severity = severity

    @property
    def code(self) -> str:
        return self.kind.name

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"error": self.message}


# ─── Client errors (400-level) ──────────────────────────────────

class ValidationError(AppError):
    """Request data failed validation; carries field-level errors."""
    def __init__(self, errors: list[FieldError]):
        if not errors:
            raise ValueError("ValidationError requires at least one FieldError")
        super().__init__(
            VALIDATION_ERROR_LABEL, ErrorKind.VALIDATION, ErrorSeverity.WARNING,
        )
        self.errors = list(errors)

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([FieldError(field, message)])

    def to_response(self) -> dict:
        return {
            "message": self.message,
            "errors": [e.to_dict() for e in self.errors],
        }


class NotFoundError(AppError):
    """Referenced entity does not exist."""
    def __init__(self, resource: str, resource_id: object = None):
        super().__init__(
            f"{resource} not found", ErrorKind.NOT_FOUND, ErrorSeverity.WARNING,
        )
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(AppError):
    """Operation not allowed in the entity's current state."""
    def __init__(self, message: str):
        super().__init__(message, ErrorKind.CONFLICT, ErrorSeverity.WARNING)


# ─── Infrastructure errors (500-level) ──────────────────────────

class ExternalServiceError(AppError):
    """An external collaborator (AI plan generator) failed."""
    def __init__(self, service: str, message: str):
        super().__init__(
            f"{service} failed: {message}",
            ErrorKind.EXTERNAL_SERVICE, ErrorSeverity.CRITICAL,
        )
        self.service = service


class DatabaseError(AppError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            ErrorKind.DATABASE, ErrorSeverity.CRITICAL,
        )
        self.operation = operation


class InternalError(AppError):
    """Unclassified failure; message is replaced before reaching clients."""
    PUBLIC_MESSAGE = "An unexpected error occurred"

    def __init__(self, message: str = PUBLIC_MESSAGE):
        super().__init__(message, ErrorKind.INTERNAL, ErrorSeverity.CRITICAL)

    def to_response(self) -> dict:
        return {"error": self.PUBLIC_MESSAGE}
