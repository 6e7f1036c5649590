"""Error Hierarchy — typed exceptions for dataset and runtime failures.

Invariants:
    - Each subclass fixes its code, category, severity, and http_status as class attributes
    - Dataset errors are raised before any catalog exists; no partial deck is served
    - Gameplay refusals are NOT errors (see game_commands.MoveResult)
    - to_response() is the only shape that reaches a client

Design Decisions:
    - One CardSortError base so a single FastAPI handler covers every failure
    - ErrorContext carries game / pile / card ids for logs and responses
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATASET = "dataset"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where an error happened. Ids are strings as they appear on the wire."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    game_id: str | None = None
    pile_id: str | None = None
    card_id: str | None = None
    debug_info: dict[str, Any] | None = None

    def ids(self) -> dict[str, str | None]:
        return {
            "game_id": self.game_id,
            "pile_id": self.pile_id,
            "card_id": self.card_id,
        }


class CardSortError(Exception):
    """Base exception. Subclasses override the ClassVars below."""

    code: ClassVar[str] = "INTERNAL_ERROR"
    category: ClassVar[ErrorCategory] = ErrorCategory.INTERNAL
    severity: ClassVar[ErrorSeverity] = ErrorSeverity.ERROR
    http_status: ClassVar[int] = 500

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def details(self) -> dict[str, Any]:
        """Subclass-specific fields added to the response body."""
        return {}

    def to_response(self) -> dict:
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "context": self.context.ids(),
        }
        details = self.details()
        if details:
            body["details"] = details
        return {"error": body}


# ─── Dataset Errors (fatal at load time) ────────────────────────

class DatasetValidationError(CardSortError):
    """Raw dataset failed a shape, cardinality, or uniqueness check."""
    code = "DATASET_INVALID"
    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.CRITICAL
    http_status = 422

    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(message, context)
        self.field = field

    def details(self) -> dict[str, Any]:
        return {"field": self.field}


class DatasetNotFoundError(CardSortError):
    code = "DATASET_NOT_FOUND"
    category = ErrorCategory.DATASET
    severity = ErrorSeverity.CRITICAL

    def __init__(self, path: str, context: ErrorContext | None = None):
        super().__init__(f"Dataset file not found at {path}", context)
        self.path = path


class DatasetParseError(CardSortError):
    code = "DATASET_PARSE_ERROR"
    category = ErrorCategory.DATASET
    severity = ErrorSeverity.CRITICAL

    def __init__(self, path: str, reason: str, context: ErrorContext | None = None):
        super().__init__(f"Failed to parse dataset file {path}: {reason}", context)
        self.path = path


# ─── Runtime Errors ─────────────────────────────────────────────

class ResourceNotFoundError(CardSortError):
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(f"{resource_type} '{resource_id}' not found", context)
        self.resource_type = resource_type
        self.resource_id = resource_id


class CatalogNotReadyError(CardSortError):
    """Requests arrived before init_catalog finished."""
    code = "CATALOG_NOT_READY"
    category = ErrorCategory.UNAVAILABLE
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Game dataset is not loaded", context)
