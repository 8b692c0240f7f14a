"""
Core utilities and configuration for the pg-comment library.

This package provides foundational components used by the comments package:

Modules:
    config: Library configuration and environment variable management
    database: Database engine and session management
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration and utilities

Usage:
    from core.config import settings
    from core.exceptions import ConfigurationError, MissingParentError
    from core.logging import setup_logging

Example:
    # Initialize logging
    setup_logging()

    # Sessions on an engine built from settings
    from core.database import get_session
"""

from core.config import settings
from core.logging import setup_logging
from core.exceptions import (
    CommentError,
    ConfigurationError,
    InvalidTargetError,
    MissingParentError,
    UnknownObjectKindError,
)

__all__ = [
    "settings",
    "setup_logging",
    # Exceptions
    "CommentError",
    "ConfigurationError",
    "UnknownObjectKindError",
    "MissingParentError",
    "InvalidTargetError",
]
