"""
Exception hierarchy for Storage Quest.

Store operations treat referential misses as silent no-ops, so most of these
errors are only raised by the strict helpers (``require_unit``,
``require_item``, ``SnapshotStorage.load_strict``) and by unit creation when
the requested grid has no cells.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class ErrorContext:
    """
    Contextual information for error handling.

    Identifies which unit, item, or slot an operation was aimed at when it
    failed.
    """

    operation: str | None = None
    unit_id: str | None = None
    item_id: str | None = None
    row: int | None = None
    col: int | None = None
    timestamp: datetime = field(default_factory=datetime.now)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for logging."""
        return {
            "operation": self.operation,
            "unit_id": self.unit_id,
            "item_id": self.item_id,
            "row": self.row,
            "col": self.col,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


class StorageQuestError(Exception):
    """
    Base exception for all Storage Quest errors.

    Carries structured context and details so the error can be logged and
    rendered without string parsing.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        details: dict[str, Any] | None = None,
        user_friendly: str | None = None,
    ):
        """
        Initialize Storage Quest error.

        Args:
            message: Technical error message
            context: Error context information
            details: Additional error details
            user_friendly: User-friendly error message
        """
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.details = details or {}
        self.user_friendly = user_friendly or message
        self.timestamp = datetime.now()

        self._log_error()

    def _log_error(self):
        """Log the error with structured context."""
        logger.error(
            "Storage Quest error occurred",
            error_type=self.__class__.__name__,
            message=self.message,
            context=self.context.to_dict(),
            details=self.details,
            timestamp=self.timestamp.isoformat(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for display or serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "user_friendly": self.user_friendly,
            "context": self.context.to_dict(),
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class NotFoundError(StorageQuestError):
    """A unit, item instance, or item definition id is absent."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        resource_type: str | None = None,
        resource_id: str | None = None,
        **kwargs,
    ):
        super().__init__(message, context, **kwargs)
        self.resource_type = resource_type
        self.resource_id = resource_id
        if resource_type:
            self.details["resource_type"] = resource_type
        if resource_id:
            self.details["resource_id"] = resource_id


class InvalidGeometryError(StorageQuestError):
    """Grid dimensions or slot coordinates fall outside the allowed bounds."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        rows: int | None = None,
        cols: int | None = None,
        **kwargs,
    ):
        super().__init__(message, context, **kwargs)
        self.rows = rows
        self.cols = cols
        if rows is not None:
            self.details["rows"] = rows
        if cols is not None:
            self.details["cols"] = cols


class ConfigurationError(StorageQuestError):
    """Configuration and setup errors."""

    def __init__(self, message: str, context: ErrorContext | None = None, config_key: str | None = None, **kwargs):
        super().__init__(message, context, **kwargs)
        self.config_key = config_key
        if config_key:
            self.details["config_key"] = config_key


class SnapshotError(StorageQuestError):
    """A persisted snapshot could not be read, validated, or written."""

    def __init__(self, message: str, context: ErrorContext | None = None, path: str | None = None, **kwargs):
        super().__init__(message, context, **kwargs)
        self.path = path
        if path:
            self.details["path"] = path
