from __future__ import annotations

import pytest

from sessiongate.shared.core.errors import ProbeError
from sessiongate.shared.domain.identity import LogoutSucceeded
from sessiongate.shared.domain.session import (
    Authenticated,
    InitialProbe,
    Initializing,
    SessionStateStore,
    Unauthenticated,
)
from tests.helpers.fakes import FakeIdentityClient


def test_probe_with_cached_account_authenticates(alice):
    client = FakeIdentityClient([alice])
    store = SessionStateStore()

    assert InitialProbe(client, store).run() is True

    assert isinstance(store.current_state(), Authenticated)
    assert store.current_state().identity is alice
    assert store.loading() is False


def test_probe_with_empty_cache_is_unauthenticated(client):
    store = SessionStateStore()

    InitialProbe(client, store).run()

    assert isinstance(store.current_state(), Unauthenticated)
    assert store.loading() is False


def test_probe_runs_only_once(alice):
    client = FakeIdentityClient([alice])
    store = SessionStateStore()
    probe = InitialProbe(client, store)

    probe.run()
    assert probe.run() is False

    assert client.enumerate_calls == 1
    assert probe.result.accounts == (alice,)


def test_probe_after_event_is_noop(alice):
    client = FakeIdentityClient([alice])
    store = SessionStateStore()
    store.apply(LogoutSucceeded())

    assert InitialProbe(client, store).run() is False
    assert isinstance(store.current_state(), Unauthenticated)


def test_probe_failure_raises_and_keeps_initializing(client):
    client.enumerate_error = OSError("cache locked")
    store = SessionStateStore()

    with pytest.raises(ProbeError):
        InitialProbe(client, store).run()

    assert isinstance(store.current_state(), Initializing)
    assert store.loading() is True
