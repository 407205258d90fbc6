"""
Configuration - Application settings and error taxonomy.
"""

from .errors import (
    EntryValidationError,
    ErrorCode,
    InvalidLetterError,
    InvalidTypeError,
    LexiconError,
    NotFoundError,
    PaginationError,
    StorageError,
)
from .settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Errors
    "ErrorCode",
    "LexiconError",
    "PaginationError",
    "InvalidTypeError",
    "InvalidLetterError",
    "EntryValidationError",
    "NotFoundError",
    "StorageError",
]
