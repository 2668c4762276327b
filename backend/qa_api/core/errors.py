"""Error Hierarchy — typed exceptions for every Q&A failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory) and http_status
    - to_response() produces the public envelope {"error": message}
    - Persistence causes are kept on the exception, never in the response body

Design Decisions:
    - Single hierarchy with QAError base: one global handler catches all
    - NotFound is its own class checked by is_not_found(); handlers never
      inspect messages to pick 404 over 500
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """High-level error categories for routing and logging."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    PERSISTENCE = "persistence"


class QAError(Exception):
    """Base exception for all Q&A API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error body."""
        return {"error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(QAError):
    """Malformed JSON, missing/blank field or bad identifier."""
    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION, 400,
        )
        self.field = field


class NotFoundError(QAError):
    """No row matches the requested identifier."""
    def __init__(self, resource: str, resource_id: int | None = None):
        super().__init__(
            f"{resource} not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND, 404,
        )
        self.resource = resource
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class PersistenceError(QAError):
    """Database operation failed (connectivity, constraint, timeout)."""
    def __init__(
        self, message: str, operation: str, cause: BaseException | None = None,
    ):
        super().__init__(
            f"Database {operation} failed: {message}",
            "PERSISTENCE_ERROR", ErrorCategory.PERSISTENCE, 500,
        )
        self.operation = operation
        self.cause = cause
        self.public_message = "internal server error"

    def to_response(self) -> dict:
        """Client-facing body; the database message stays server-side."""
        return {"error": self.public_message}


def is_not_found(exc: BaseException) -> bool:
    """True when exc means "no matching row" rather than a generic failure."""
    return isinstance(exc, NotFoundError)
