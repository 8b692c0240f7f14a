"""
Custom exceptions for comment handling with structured error context.

Every error raised by this package is a configuration error: the target
handed to the builder cannot be addressed, so no SQL is produced. Errors
raised by the database while a statement runs (permission denied, object
does not exist, ...) are SQLAlchemy exceptions and reach the caller as-is.

Exception Hierarchy:
    CommentError (base)
    └── ConfigurationError
        ├── UnknownObjectKindError
        ├── MissingParentError
        └── InvalidTargetError
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class CommentError(Exception):
    """
    Base exception for all comment-related errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (kind, identifier, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        self.context["error_timestamp"] = self.timestamp.isoformat()

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigurationError(CommentError):
    """Base exception for targets that cannot be turned into SQL."""
    pass


class UnknownObjectKindError(ConfigurationError):
    """
    Exception raised when the object kind is not a known PostgreSQL kind.

    Context should include:
        - kind: The kind that was requested
    """
    pass


class MissingParentError(ConfigurationError):
    """
    Exception raised when a contained kind (column, constraint, rule,
    trigger) is addressed without the object that owns it.

    Context should include:
        - kind: The contained kind
        - identifier: The name of the contained object
    """
    pass


class InvalidTargetError(ConfigurationError):
    """
    Exception raised when a target is structurally wrong for its kind.

    Examples:
        - empty identifier or empty name part
        - a parent given for a standalone kind
        - a large object addressed by name instead of OID
        - a cast without exactly two types
        - a type name that does not look like one
    """
    pass
