"""
Session gate exceptions.

Structured error hierarchy carrying machine-readable codes and details, so
failures can be handed to the diagnostics channel without losing context.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class SessionGateError(Exception):
    """
    Base exception for all session gate errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        details: Additional error context
        timestamp: When the error occurred
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for reporting."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class InitiationError(SessionGateError):
    """A login or logout redirect flow could not be started."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code="INITIATION_FAILED", details=details)
        self.operation = operation
        self.details.setdefault("operation", operation)


class SubscriptionError(SessionGateError):
    """The identity client refused or failed to register an event callback."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code="SUBSCRIPTION_FAILED", details=details)


class ProbeError(SessionGateError):
    """Enumerating cached accounts failed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code="PROBE_FAILED", details=details)


class ConfigurationError(SessionGateError):
    """Configuration could not be loaded or validated."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code="CONFIGURATION_INVALID", details=details)
