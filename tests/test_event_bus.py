from __future__ import annotations

import asyncio
import logging

import pytest

from sessiongate.shared.core import events
from sessiongate.shared.core.event_bus import EventBus


@pytest.mark.asyncio
async def test_publish_reaches_every_subscriber():
    bus = EventBus()
    first, second = [], []

    async def on_first(payload):
        first.append(payload)

    async def on_second(payload):
        second.append(payload)

    await bus.subscribe(events.TOPIC_STATUS_TEXT, on_first)
    await bus.subscribe(events.TOPIC_STATUS_TEXT, on_second)
    await bus.subscribe(events.TOPIC_STATUS_TEXT, on_first)

    await bus.publish(events.TOPIC_STATUS_TEXT, events.create_status_text_event("ready"))
    assert await bus.wait_until_idle(timeout=1.0)

    assert first == [{"text": "ready"}]
    assert second == [{"text": "ready"}]
    assert bus.subscriber_count(events.TOPIC_STATUS_TEXT) == 2


@pytest.mark.asyncio
async def test_failing_handler_does_not_stop_others(caplog):
    bus = EventBus()
    received = []

    async def broken(payload):
        raise ValueError("bad payload")

    async def healthy(payload):
        received.append(payload)

    await bus.subscribe("topic", broken)
    await bus.subscribe("topic", healthy)

    with caplog.at_level(logging.ERROR):
        await bus.publish("topic", {"n": 1})
        assert await bus.wait_until_idle(timeout=1.0)

    assert received == [{"n": 1}]
    assert "broken" in caplog.text


@pytest.mark.asyncio
async def test_unsubscribe_stops_delivery():
    bus = EventBus()
    received = []

    async def handler(payload):
        received.append(payload)

    await bus.subscribe("topic", handler)
    await bus.unsubscribe("topic", handler)
    await bus.unsubscribe("topic", handler)
    await bus.publish("topic", {"n": 1})

    assert await bus.wait_until_idle(timeout=1.0)
    assert received == []


@pytest.mark.asyncio
async def test_wait_until_idle_times_out_on_stuck_handler():
    bus = EventBus()
    release = asyncio.Event()

    async def stuck(payload):
        await release.wait()

    await bus.subscribe("topic", stuck)
    await bus.publish("topic", {})

    assert await bus.wait_until_idle(timeout=0.05) is False
    release.set()
    assert await bus.wait_until_idle(timeout=1.0) is True


def test_logs_event_factory_carries_level_and_timestamp():
    payload = events.create_logs_event("login failed", "error", topic=events.TOPIC_AUTH_INITIATION_FAILED)

    assert payload["level"] == "error"
    assert payload["topic"] == events.TOPIC_AUTH_INITIATION_FAILED
    assert payload["ts"] > 0
