"""Diagnostics sinks: the external failure channel for recoverable errors."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol, runtime_checkable

from . import events
from .errors import SessionGateError
from .event_bus import EventBus

logger = logging.getLogger(__name__)

_FAILURE_TOPICS = {
    "INITIATION_FAILED": events.TOPIC_AUTH_INITIATION_FAILED,
    "SUBSCRIPTION_FAILED": events.TOPIC_AUTH_SUBSCRIPTION_FAILED,
    "PROBE_FAILED": events.TOPIC_AUTH_PROBE_FAILED,
}


@runtime_checkable
class DiagnosticsSink(Protocol):
    def report(self, operation: str, error: SessionGateError) -> None:
        ...


class LoggingDiagnostics:
    """Reports failures to the log only."""

    def report(self, operation: str, error: SessionGateError) -> None:
        logger.error(f"{operation} failed [{error.error_code}]: {error.message}")


class EventBusDiagnostics:
    """Publishes failures to the EventBus so the shell can show them.

    Publishing is scheduled on the running loop; `report` itself never
    raises and never blocks the caller.
    """

    def __init__(self, bus: EventBus) -> None:
        self.bus = bus
        self._tasks: set[asyncio.Task] = set()

    def report(self, operation: str, error: SessionGateError) -> None:
        logger.error(f"{operation} failed [{error.error_code}]: {error.message}")
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(f"No running loop, {operation} failure not published")
            return

        task = loop.create_task(self._publish(operation, error))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _publish(self, operation: str, error: SessionGateError) -> None:
        topic = _FAILURE_TOPICS.get(error.error_code, events.TOPIC_LOGS_EVENT)
        await self.bus.publish(
            topic,
            events.create_failure_event(operation, error.error_code, error.message, error.details),
        )
        await self.bus.publish(
            events.TOPIC_LOGS_EVENT,
            events.create_logs_event(f"{operation} failed: {error.message}", "error", topic=topic),
        )
