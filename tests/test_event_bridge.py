from __future__ import annotations

import logging

import pytest

from sessiongate.shared.core.errors import SubscriptionError
from sessiongate.shared.domain.identity import LoginSucceeded, LogoutSucceeded, OtherEvent
from sessiongate.shared.domain.session import (
    Authenticated,
    EventBridge,
    Initializing,
    SessionStateStore,
    Unauthenticated,
)


@pytest.fixture
def store() -> SessionStateStore:
    return SessionStateStore()


def test_start_registers_one_subscription(client, store):
    bridge = EventBridge(client, store)

    handle = bridge.start()

    assert client.subscribe_calls == 1
    assert list(client.callbacks) == [handle]
    assert bridge.active


def test_events_flow_into_store(client, store, alice):
    bridge = EventBridge(client, store)
    bridge.start()

    client.emit(LoginSucceeded(alice))
    assert isinstance(store.current_state(), Authenticated)

    client.emit(LogoutSucceeded())
    assert isinstance(store.current_state(), Unauthenticated)
    assert store.loading() is False


def test_unrecognized_event_is_ignored(client, store):
    bridge = EventBridge(client, store)
    bridge.start()

    client.emit(OtherEvent(kind="msal:somethingNew", payload={"x": 1}))

    assert isinstance(store.current_state(), Initializing)
    assert store.loading() is True


def test_second_start_raises_while_subscribed(client, store):
    bridge = EventBridge(client, store)
    bridge.start()

    with pytest.raises(RuntimeError):
        bridge.start()
    assert client.subscribe_calls == 1


def test_stop_before_start_is_noop(client, store):
    bridge = EventBridge(client, store)

    bridge.stop()
    bridge.stop()

    assert client.unsubscribe_calls == []


def test_stop_unsubscribes_exactly_once(client, store):
    bridge = EventBridge(client, store)
    handle = bridge.start()

    bridge.stop()
    bridge.stop()

    assert client.unsubscribe_calls == [handle]
    assert not bridge.active


def test_queued_event_after_stop_does_not_mutate_state(client, store, alice):
    bridge = EventBridge(client, store)
    bridge.start()
    queued = client.last_callback()

    bridge.stop()
    queued(LoginSucceeded(alice))

    assert isinstance(store.current_state(), Initializing)
    assert store.loading() is True


def test_old_callback_stays_dead_after_restart(client, store, alice):
    bridge = EventBridge(client, store)
    bridge.start()
    stale = client.last_callback()
    bridge.stop()
    bridge.start()

    stale(LoginSucceeded(alice))
    assert isinstance(store.current_state(), Initializing)

    client.emit(LoginSucceeded(alice))
    assert isinstance(store.current_state(), Authenticated)


def test_subscribe_failure_raises_subscription_error(client, store):
    client.subscribe_error = ConnectionError("provider not ready")
    bridge = EventBridge(client, store)

    with pytest.raises(SubscriptionError) as excinfo:
        bridge.start()

    assert excinfo.value.error_code == "SUBSCRIPTION_FAILED"
    assert not bridge.active
    bridge.stop()
    assert client.unsubscribe_calls == []


def test_unsubscribe_error_is_logged_not_raised(client, store, caplog):
    bridge = EventBridge(client, store)
    bridge.start()
    client.unsubscribe_error = RuntimeError("already gone")

    with caplog.at_level(logging.ERROR):
        bridge.stop()

    assert not bridge.active
    assert "failed to unsubscribe" in caplog.text
