"""Error Hierarchy - typed, categorized exceptions for every API failure mode.

Invariants:
    - Every error has a message, code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() produces the REST envelope: {"error": message} plus "details" when present
    - Not-found is a 404 outcome, store failures are 500 - nothing else crosses the API boundary

Design Decisions:
    - Single hierarchy with VinylApiError base: one FastAPI handler renders all of them
    - details carried verbatim from the underlying failure so callers can diagnose store errors
"""

from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
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


class VinylApiError(Exception):
    """Base exception for all API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to REST error body."""
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


# ─── Domain Errors (400-level) ──────────────────────────────────

class VinylNotFoundError(VinylApiError):
    """Addressed vinyl does not exist."""
    def __init__(self, vinyl_id: str):
        super().__init__(
            "Vinyl not found", "VINYL_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO, 404,
        )
        self.vinyl_id = vinyl_id


class InvalidQueryError(ValueError):
    """Query parameter cannot be turned into a store query.

    Deliberately not a VinylApiError: the operation boundary reports it
    like any other failed store call.
    """
    def __init__(self, parameter: str, value: str):
        super().__init__(f"Unsupported {parameter} value '{value}'")
        self.parameter = parameter
        self.value = value


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreOperationError(VinylApiError):
    """A store call failed inside an operation boundary."""
    def __init__(self, message: str, operation: str, details: Any):
        super().__init__(
            message, "STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500, details,
        )
        self.operation = operation
