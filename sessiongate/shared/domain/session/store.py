"""Session State Store.

Holds the reconciled session state and the one-shot loading gate. The store
is handed to the event bridge and the initial probe; renderers only see the
read side through SessionMount.
"""

from __future__ import annotations

import logging
from typing import Callable, List, TypeAlias

from .state import INITIALIZING, Initializing, SessionInput, SessionState, status_of, transition

logger = logging.getLogger(__name__)

StateListener: TypeAlias = Callable[[SessionState, bool], None]


class SessionStateStore:
    """Reconciled session state plus the loading gate.

    The gate starts engaged and is released by whichever input first moves
    the state out of Initializing. It is never engaged again.
    """

    def __init__(self) -> None:
        self._state: SessionState = INITIALIZING
        self._loading = True
        self._listeners: List[StateListener] = []

    def current_state(self) -> SessionState:
        return self._state

    def loading(self) -> bool:
        return self._loading

    def apply(self, event: SessionInput) -> bool:
        """Apply one input through the transition table.

        Returns:
            True if the state or the loading gate changed
        """
        previous = self._state
        next_state = transition(previous, event)

        released = False
        if self._loading and not isinstance(next_state, Initializing):
            self._loading = False
            released = True
            logger.info(f"Loading gate released by {type(event).__name__}")

        if next_state == previous and not released:
            logger.debug(f"{type(event).__name__} left session {status_of(previous)}")
            return False

        self._state = next_state
        logger.info(f"Session {status_of(previous)} -> {status_of(next_state)}")
        self._notify()
        return True

    def listen(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener called with (state, loading) after each change.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def _unlisten() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unlisten

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state, self._loading)
            except Exception:
                logger.exception(f"Session listener {getattr(listener, '__name__', listener)} failed")
