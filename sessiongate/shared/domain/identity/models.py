"""Identity-side data types shared between the provider adapter and the session core."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, NewType, Optional, TypeAlias

SubscriptionHandle = NewType("SubscriptionHandle", str)


@dataclass(frozen=True, eq=False)
class Identity:
    """An account known to the identity provider.

    Compared by object identity: the session core keeps a reference to the
    provider's object and never builds its own copy.
    """

    home_account_id: str
    username: str
    claims: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass(frozen=True)
class LoginSucceeded:
    identity: Identity


@dataclass(frozen=True)
class LogoutSucceeded:
    pass


@dataclass(frozen=True)
class OtherEvent:
    """Any provider event the session core does not reconcile."""

    kind: str
    payload: Optional[Dict[str, Any]] = None


ProviderEvent: TypeAlias = LoginSucceeded | LogoutSucceeded | OtherEvent
