"""Portal Shell State Management.

Reactive mirror of the session mount for the Flet shell, using FletXr
primitives so bound controls pick up changes without manual bookkeeping.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Optional

from fletx.core import RxBool, RxList, RxStr

from sessiongate.shared.core import events
from sessiongate.shared.core.event_bus import EventBus, EventPayload
from sessiongate.shared.domain.session import Authenticated, SessionMount, SessionState

MAX_LOG_ENTRIES = 100


class PortalState:
    """Reactive state for the portal shell.

    Values are written only from the session store's listener and from
    EventBus handlers; UI components read them.
    """

    def __init__(self, mount: SessionMount, event_bus: EventBus) -> None:
        """Initialize portal state.

        Args:
            mount: The session mount this shell renders
            event_bus: The shared event bus carrying diagnostics
        """
        self.mount = mount
        self.bus = event_bus

        # Session mirror
        self.is_loading: RxBool = RxBool(mount.loading())
        self.is_authenticated: RxBool = RxBool(False)
        self.username: RxStr = RxStr("")

        # Status & diagnostics
        self.status_text: RxStr = RxStr("Checking sign-in status...")
        self.last_error: RxStr = RxStr("")
        self.logs: RxList[Dict[str, Any]] = RxList([])

        self._unlisten: Optional[Callable[[], None]] = None
        self._started = False
        self.sync(mount.current_state(), mount.loading())

    async def initialize(self) -> None:
        """Bind to the session store and EventBus topics. Idempotent."""
        if self._started:
            return

        self._unlisten = self.mount.listen(self.sync)
        await self.bus.subscribe(events.TOPIC_AUTH_INITIATION_FAILED, self._handle_initiation_failed)
        await self.bus.subscribe(events.TOPIC_LOGS_EVENT, self._handle_log_event)
        await self.bus.subscribe(events.TOPIC_STATUS_TEXT, self._handle_status_text)
        self._started = True

    async def dispose(self) -> None:
        """Drop the bindings made by initialize()."""
        if not self._started:
            return
        if self._unlisten is not None:
            self._unlisten()
            self._unlisten = None
        await self.bus.unsubscribe(events.TOPIC_AUTH_INITIATION_FAILED, self._handle_initiation_failed)
        await self.bus.unsubscribe(events.TOPIC_LOGS_EVENT, self._handle_log_event)
        await self.bus.unsubscribe(events.TOPIC_STATUS_TEXT, self._handle_status_text)
        self._started = False

    def sync(self, state: SessionState, loading: bool) -> None:
        """Copy the session verdict into the reactive values."""
        self.is_loading.value = loading
        if isinstance(state, Authenticated):
            self.is_authenticated.value = True
            self.username.value = state.username
            self.status_text.value = "You are logged in!"
        else:
            self.is_authenticated.value = False
            self.username.value = ""
            self.status_text.value = "Loading..." if loading else "You are not logged in."
        self.last_error.value = ""

    # --- Event Handlers ---

    async def _handle_initiation_failed(self, payload: EventPayload) -> None:
        message = payload.get("message")
        if message:
            self.last_error.value = str(message)

    async def _handle_log_event(self, payload: EventPayload) -> None:
        if not payload:
            return
        entry = {"ts": time.time(), **payload}
        self.logs.append(entry)
        if len(self.logs.value) > MAX_LOG_ENTRIES:
            self.logs.value = list(self.logs.value)[-MAX_LOG_ENTRIES:]

    async def _handle_status_text(self, payload: EventPayload) -> None:
        text = payload.get("text")
        if text:
            self.status_text.value = str(text)
