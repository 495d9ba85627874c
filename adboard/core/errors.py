"""Error Hierarchy — typed, categorized exceptions for all adboard failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are reportable per request; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with AdboardError base: FastAPI global handler catches all
    - InvalidOperationError is a family: callers may catch the family or one rule
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    AUTHORIZATION = "authorization"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_type: str | None = None
    resource_id: str | None = None
    actor_id: str | None = None
    debug_info: dict[str, Any] | None = None


class AdboardError(Exception):
    """Base exception for all adboard errors."""

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
                "context": {
                    "resource_type": self.context.resource_type,
                    "resource_id": self.context.resource_id,
                },
            }
        }


def _context_for(
    resource_type: str, resource_id: object, context: ErrorContext | None,
) -> ErrorContext:
    ctx = context or ErrorContext()
    ctx.resource_type = ctx.resource_type or resource_type
    ctx.resource_id = ctx.resource_id or str(resource_id)
    return ctx


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(AdboardError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: object, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, _context_for(resource_type, resource_id, context), 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class DuplicateNameError(AdboardError):
    """Another resource of the same type already owns this name."""
    def __init__(self, resource_type: str, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"{resource_type} with name '{name}' already exists",
            "DUPLICATE_NAME", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, _context_for(resource_type, name, context), 409,
        )
        self.resource_type = resource_type
        self.name = name


class InvalidOperationError(AdboardError):
    """Business rule violation. Subclasses name the rule."""
    def __init__(
        self,
        message: str,
        code: str = "INVALID_OPERATION",
        context: ErrorContext | None = None,
        http_status: int = 400,
    ):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, http_status,
        )


class CircularReferenceError(InvalidOperationError):
    """Reparenting would make a category its own ancestor."""
    def __init__(self, category_id: object, parent_id: object, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot set category '{parent_id}' as parent of '{category_id}': "
            "circular reference",
            "CIRCULAR_REFERENCE",
            _context_for("Category", category_id, context),
            400,
        )
        self.category_id = category_id
        self.parent_id = parent_id


class HasSubcategoriesError(InvalidOperationError):
    """Category still has direct children."""
    def __init__(self, category_id: object, context: ErrorContext | None = None):
        super().__init__(
            f"Category '{category_id}' has subcategories and cannot be deleted",
            "HAS_SUBCATEGORIES",
            _context_for("Category", category_id, context),
            409,
        )
        self.category_id = category_id


class ReferencedByAdsError(InvalidOperationError):
    """Category or tag is still referenced by advertisements."""
    def __init__(
        self,
        resource_type: str,
        resource_id: object,
        ad_count: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' has ads and cannot be deleted",
            "REFERENCED_BY_ADS",
            _context_for(resource_type, resource_id, context),
            409,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.ad_count = ad_count


class InvalidStatusTransitionError(InvalidOperationError):
    """Ad status change not present in the transition table."""
    def __init__(
        self,
        ad_id: object,
        current_status: str,
        attempted_status: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Ad '{ad_id}' cannot move from {current_status} to {attempted_status}",
            "INVALID_STATUS_TRANSITION",
            _context_for("Ad", ad_id, context),
            400,
        )
        self.ad_id = ad_id
        self.current_status = current_status
        self.attempted_status = attempted_status


class InvalidTagNameError(InvalidOperationError):
    """Tag name is empty or too long after normalization."""
    def __init__(self, name: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid tag name '{name}': {reason}",
            "INVALID_TAG_NAME",
            _context_for("Tag", name, context),
            400,
        )
        self.name = name


class UnauthorizedError(AdboardError):
    """Actor may not modify this resource."""
    def __init__(
        self,
        resource_type: str,
        resource_id: object,
        actor_id: object,
        context: ErrorContext | None = None,
    ):
        ctx = _context_for(resource_type, resource_id, context)
        ctx.actor_id = str(actor_id)
        super().__init__(
            f"No permission to modify {resource_type.lower()} '{resource_id}'",
            "UNAUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, ctx, 403,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(AdboardError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
