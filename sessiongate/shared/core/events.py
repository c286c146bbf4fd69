"""Canonical event topics and payload factories for SessionGate."""

from __future__ import annotations

import time
from typing import Any, Dict, Literal, Optional

from .event_bus import EventPayload

# Event Topics
TOPIC_LOGS_EVENT = "logs.event"
TOPIC_STATUS_TEXT = "status.text"

# Session lifecycle events
TOPIC_SESSION_CHANGED = "session.changed"
TOPIC_SESSION_READY = "session.ready"
TOPIC_SESSION_MOUNTED = "session.mounted"
TOPIC_SESSION_UNMOUNTED = "session.unmounted"

# Failure channel
TOPIC_AUTH_INITIATION_FAILED = "auth.initiation.failed"
TOPIC_AUTH_SUBSCRIPTION_FAILED = "auth.subscription.failed"
TOPIC_AUTH_PROBE_FAILED = "auth.probe.failed"


def create_logs_event(
    message: str,
    level: Literal["info", "warning", "error", "success"] = "info",
    topic: str | None = None,
) -> EventPayload:
    """Create a Log event."""
    return {
        "message": message,
        "level": level,
        "topic": topic,
        "ts": time.time(),
    }


def create_status_text_event(text: str) -> EventPayload:
    """Create a status text update event."""
    return {
        "text": text,
    }


def create_session_changed_event(
    status: str,
    username: Optional[str] = None,
    loading: bool = False,
) -> EventPayload:
    """Create a session changed event.

    Args:
        status: One of "initializing", "unauthenticated", "authenticated"
        username: Display name of the active account, if any
        loading: Whether the loading gate is still engaged
    """
    return {
        "status": status,
        "username": username,
        "loading": loading,
    }


def create_failure_event(
    operation: str,
    error_code: str,
    message: str,
    details: Dict[str, Any] | None = None,
) -> EventPayload:
    """Create a failure report for the diagnostics channel."""
    return {
        "operation": operation,
        "error_code": error_code,
        "message": message,
        "details": details or {},
        "ts": time.time(),
    }
