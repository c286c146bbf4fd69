"""Session state variants and the pure transition function.

Nothing here touches the identity client or the UI. The store applies
`transition` and handles side effects (loading gate, listeners).
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Sequence, TypeAlias, assert_never

from sessiongate.shared.domain.identity.models import (
    Identity,
    LoginSucceeded,
    LogoutSucceeded,
    OtherEvent,
    ProviderEvent,
)


@dataclass(frozen=True)
class Initializing:
    """No verdict yet."""


@dataclass(frozen=True)
class Unauthenticated:
    """No valid identity."""


@dataclass(frozen=True)
class Authenticated:
    identity: Identity

    @property
    def username(self) -> str:
        return self.identity.username


SessionState: TypeAlias = Initializing | Unauthenticated | Authenticated


@dataclass(frozen=True)
class ProbeResolved:
    """Result of the one-time cached account read at mount."""

    accounts: Sequence[Identity]


SessionInput: TypeAlias = ProbeResolved | ProviderEvent

INITIALIZING = Initializing()
UNAUTHENTICATED = Unauthenticated()


def transition(state: SessionState, event: SessionInput) -> SessionState:
    """Compute the next session state.

    Probe results only count while the state is still Initializing, so a
    provider event that resolved the session first is never overridden.
    """
    if isinstance(event, ProbeResolved):
        if not isinstance(state, Initializing):
            return state
        if event.accounts:
            return Authenticated(event.accounts[0])
        return UNAUTHENTICATED
    if isinstance(event, LoginSucceeded):
        if isinstance(state, Authenticated) and state.identity is event.identity:
            return state
        return Authenticated(event.identity)
    if isinstance(event, LogoutSucceeded):
        return UNAUTHENTICATED
    if isinstance(event, OtherEvent):
        return state
    assert_never(event)


def fold(state: SessionState, events: Iterable[SessionInput]) -> SessionState:
    return reduce(transition, events, state)


def status_of(state: SessionState) -> str:
    """Short status name used in events and logs."""
    if isinstance(state, Initializing):
        return "initializing"
    if isinstance(state, Unauthenticated):
        return "unauthenticated"
    if isinstance(state, Authenticated):
        return "authenticated"
    assert_never(state)
