"""Event bridge between identity provider notifications and the session store."""

from __future__ import annotations

import logging
from typing import Optional

from sessiongate.shared.core.errors import SubscriptionError
from sessiongate.shared.domain.identity.models import OtherEvent, ProviderEvent, SubscriptionHandle
from sessiongate.shared.domain.identity.protocols import IdentityClient

from .store import SessionStateStore

logger = logging.getLogger(__name__)


class EventBridge:
    """Owns the single provider subscription of one mount.

    Each `start()` installs a fresh callback tied to that subscription. Once
    `stop()` runs, the callback is disarmed, so an event the provider had
    already queued is dropped instead of reaching the store.
    """

    def __init__(self, client: IdentityClient, store: SessionStateStore) -> None:
        self.client = client
        self.store = store
        self._handle: Optional[SubscriptionHandle] = None
        self._generation: Optional[object] = None

    @property
    def handle(self) -> Optional[SubscriptionHandle]:
        return self._handle

    @property
    def active(self) -> bool:
        return self._handle is not None

    def start(self) -> SubscriptionHandle:
        """Register with the identity client.

        Raises:
            RuntimeError: If a subscription is already outstanding
            SubscriptionError: If the client could not register the callback
        """
        if self._handle is not None:
            raise RuntimeError("EventBridge already started; call stop() first")

        generation = object()
        self._generation = generation

        def _callback(event: ProviderEvent) -> None:
            self._on_event(generation, event)

        try:
            handle = self.client.subscribe(_callback)
        except Exception as exc:
            self._generation = None
            raise SubscriptionError(
                f"Could not subscribe to identity provider events: {exc}",
                details={"exception": type(exc).__name__},
            ) from exc

        if not handle:
            self._generation = None
            raise SubscriptionError("Identity provider returned an empty subscription handle")

        self._handle = handle
        logger.info(f"Subscribed to identity provider events ({handle})")
        return handle

    def stop(self) -> None:
        """Release the subscription. Safe to call any number of times."""
        self._generation = None
        handle, self._handle = self._handle, None
        if handle is None:
            logger.debug("EventBridge.stop() with no outstanding subscription")
            return

        try:
            self.client.unsubscribe(handle)
        except Exception:
            logger.exception(f"Identity client failed to unsubscribe {handle}")
        else:
            logger.info(f"Unsubscribed from identity provider events ({handle})")

    def _on_event(self, generation: object, event: ProviderEvent) -> None:
        if generation is not self._generation:
            logger.debug(f"Dropped {type(event).__name__} delivered after stop()")
            return
        if isinstance(event, OtherEvent):
            logger.debug(f"Ignoring provider event '{event.kind}'")
            return
        self.store.apply(event)
