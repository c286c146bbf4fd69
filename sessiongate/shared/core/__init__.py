"""
Shared Core Module
==================

Event system, errors, diagnostics and configuration.
"""

# Event System
from .event_bus import EventBus, EventPayload
from . import events

# Errors and diagnostics
from .errors import (
    ConfigurationError,
    InitiationError,
    ProbeError,
    SessionGateError,
    SubscriptionError,
)
from .diagnostics import DiagnosticsSink, EventBusDiagnostics, LoggingDiagnostics

# Configuration
from .configuration import (
    ConfigManager,
    SystemConfig,
    ValidationLevel,
)

__all__ = [
    # Event System
    "EventBus",
    "EventPayload",
    "events",
    # Errors
    "ConfigurationError",
    "InitiationError",
    "ProbeError",
    "SessionGateError",
    "SubscriptionError",
    # Diagnostics
    "DiagnosticsSink",
    "EventBusDiagnostics",
    "LoggingDiagnostics",
    # Configuration
    "ConfigManager",
    "SystemConfig",
    "ValidationLevel",
]
