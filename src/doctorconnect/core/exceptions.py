"""
Infrastructure-level exceptions for Doctor Connect.

Business rule violations live in ``doctorconnect.domain.errors``; the
classes here cover wiring and storage failures.
"""

from typing import Any, Dict, Optional


class DoctorConnectException(Exception):
    """Base exception class for infrastructure failures."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(DoctorConnectException):
    """Raised when there's a configuration error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "CONFIG_ERROR", details)


class StorageError(DoctorConnectException):
    """Raised when a certificate artifact cannot be written or read."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "STORAGE_ERROR", details)


class RenderingError(DoctorConnectException):
    """Raised when a certificate document cannot be produced."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "RENDERING_ERROR", details)
