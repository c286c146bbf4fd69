"""Session mount: wiring, teardown and the surface handed to renderers."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from sessiongate.shared.core import events
from sessiongate.shared.core.diagnostics import DiagnosticsSink, LoggingDiagnostics
from sessiongate.shared.core.errors import InitiationError, ProbeError, SubscriptionError
from sessiongate.shared.core.event_bus import EventBus, EventPayload
from sessiongate.shared.domain.identity.protocols import IdentityClient

from .bridge import EventBridge
from .probe import InitialProbe
from .state import Authenticated, SessionState, status_of
from .store import SessionStateStore, StateListener

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InitiationOutcome:
    """Result of asking the provider to start a login or logout flow."""

    operation: str
    ok: bool
    error: Optional[InitiationError] = None


class SessionMount:
    """One mounted session view.

    Owns a store, its event bridge and its initial probe. The identity client
    is passed in by whoever constructed it; nothing here looks it up.

    Usage:
        mount = SessionMount(client, diagnostics=EventBusDiagnostics(bus), bus=bus)
        mount.mount()
        ...
        await mount.trigger_login()
        ...
        mount.unmount()
    """

    def __init__(
        self,
        client: IdentityClient,
        diagnostics: Optional[DiagnosticsSink] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.client = client
        self.diagnostics = diagnostics or LoggingDiagnostics()
        self.bus = bus
        self._store = SessionStateStore()
        self.bridge = EventBridge(client, self._store)
        self.probe = InitialProbe(client, self._store)
        self._mounted = False
        self._unmounted = False
        self._tasks: set[asyncio.Task] = set()
        self._unlisten: Optional[Callable[[], None]] = None
        self._ready_published = False
        if bus is not None:
            self._unlisten = self._store.listen(self._publish_change)

    # --- Renderer surface ---

    def current_state(self) -> SessionState:
        return self._store.current_state()

    def loading(self) -> bool:
        return self._store.loading()

    def listen(self, listener: StateListener) -> Callable[[], None]:
        return self._store.listen(listener)

    async def trigger_login(self) -> InitiationOutcome:
        return await self._initiate("login", self.client.begin_login)

    async def trigger_logout(self) -> InitiationOutcome:
        return await self._initiate("logout", self.client.begin_logout)

    # --- Lifecycle ---

    @property
    def mounted(self) -> bool:
        return self._mounted and not self._unmounted

    def mount(self) -> bool:
        """Subscribe to provider events, then probe the account cache.

        Returns:
            False if the mount was already torn down or the subscription
            failed; the session then stays Initializing
        """
        if self._unmounted:
            logger.info("Mount requested after unmount; ignoring")
            return False
        if self._mounted:
            return self.bridge.active
        self._mounted = True

        try:
            self.bridge.start()
        except SubscriptionError as err:
            self.diagnostics.report("subscribe", err)
            return False

        try:
            self.probe.run()
        except ProbeError as err:
            self.diagnostics.report("probe", err)

        self._schedule(events.TOPIC_SESSION_MOUNTED, {"status": status_of(self.current_state())})
        return True

    def unmount(self) -> None:
        """Tear down the subscription. Safe before mount() and on repeat calls."""
        if self._unmounted:
            return
        self._unmounted = True
        self.bridge.stop()
        self._schedule(events.TOPIC_SESSION_UNMOUNTED, {})
        if self._unlisten is not None:
            self._unlisten()
            self._unlisten = None

    # --- Internals ---

    async def _initiate(
        self,
        operation: str,
        start: Callable[[], Awaitable[None]],
    ) -> InitiationOutcome:
        logger.info(f"Starting {operation} flow")
        try:
            await start()
        except InitiationError as err:
            error = err
        except Exception as exc:
            error = InitiationError(
                operation,
                f"Could not start {operation}: {exc}",
                details={"exception": type(exc).__name__},
            )
        else:
            return InitiationOutcome(operation, ok=True)

        self.diagnostics.report(operation, error)
        return InitiationOutcome(operation, ok=False, error=error)

    def _publish_change(self, state: SessionState, loading: bool) -> None:
        username = state.username if isinstance(state, Authenticated) else None
        self._schedule(
            events.TOPIC_SESSION_CHANGED,
            events.create_session_changed_event(status_of(state), username, loading),
        )
        if not loading and not self._ready_published:
            self._ready_published = True
            self._schedule(events.TOPIC_SESSION_READY, {"status": status_of(state)})

    def _schedule(self, topic: str, payload: EventPayload) -> None:
        if self.bus is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"No running loop, '{topic}' not published")
            return
        task = loop.create_task(self.bus.publish(topic, payload))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
