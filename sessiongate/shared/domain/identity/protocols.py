"""
Identity client protocol.

The contract the session core requires from an identity provider client.
Token acquisition, redirect handling and account storage stay behind it.
"""

from __future__ import annotations

from typing import Callable, Protocol, Sequence, TypeAlias, runtime_checkable

from .models import Identity, ProviderEvent, SubscriptionHandle

ProviderCallback: TypeAlias = Callable[[ProviderEvent], None]


@runtime_checkable
class IdentityClient(Protocol):
    """Protocol for the identity provider client consumed by the session core."""

    def enumerate_accounts(self) -> Sequence[Identity]:
        """Return the currently cached accounts. Empty when nobody is signed in."""
        ...

    def subscribe(self, callback: ProviderCallback) -> SubscriptionHandle:
        """Register a callback for provider events."""
        ...

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        """Remove a registration. Unknown or already removed handles are ignored."""
        ...

    async def begin_login(self) -> None:
        """Start the provider's login flow. May raise if the flow cannot start."""
        ...

    async def begin_logout(self) -> None:
        """Start the provider's logout flow. May raise if the flow cannot start."""
        ...
