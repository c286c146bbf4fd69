"""
Session Reconciliation
======================

Merges the provider's cached-account read and its event stream into one
session state with a one-shot loading gate.

Architecture:
- state: SessionState variants and the pure transition function
- store: SessionStateStore (state + loading gate + listeners)
- bridge: EventBridge (provider subscription lifecycle)
- probe: InitialProbe (one-time cached account read)
- mount: SessionMount (wiring, teardown, login/logout initiation)
"""

from .bridge import EventBridge
from .mount import InitiationOutcome, SessionMount
from .probe import InitialProbe
from .state import (
    INITIALIZING,
    UNAUTHENTICATED,
    Authenticated,
    Initializing,
    ProbeResolved,
    SessionInput,
    SessionState,
    Unauthenticated,
    fold,
    status_of,
    transition,
)
from .store import SessionStateStore

__all__ = [
    "INITIALIZING",
    "UNAUTHENTICATED",
    "Authenticated",
    "EventBridge",
    "InitialProbe",
    "Initializing",
    "InitiationOutcome",
    "ProbeResolved",
    "SessionInput",
    "SessionMount",
    "SessionState",
    "SessionStateStore",
    "Unauthenticated",
    "fold",
    "status_of",
    "transition",
]
