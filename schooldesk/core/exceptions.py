"""
Custom exceptions for the SchoolDesk state layer.

Expected user-input outcomes (wrong credentials, blank fields, unknown ids)
are never raised; they come back as ``None``/``False`` results. The classes
below cover infrastructure and configuration faults only.
"""

from typing import Optional, Any, Dict


class SchoolDeskException(Exception):
    """Base exception for all SchoolDesk-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class PersistenceError(SchoolDeskException):
    """Raised when the backing store cannot be read or written."""
    pass


class ConfigurationError(SchoolDeskException):
    """Raised when configuration is invalid."""
    pass
