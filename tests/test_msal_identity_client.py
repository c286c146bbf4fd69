from __future__ import annotations

import pytest

from sessiongate.shared.core.configuration import IdentityConfig
from sessiongate.shared.core.errors import ConfigurationError, InitiationError
from sessiongate.shared.domain.identity import (
    KIND_LOGIN_SUCCESS,
    KIND_LOGOUT_SUCCESS,
    LoginSucceeded,
    LogoutSucceeded,
    OtherEvent,
    provider_event_from_kind,
)
from sessiongate.shared.domain.identity.events import KIND_LOGIN_FAILURE, KIND_LOGIN_START
from sessiongate.shared.domain.session import Authenticated, SessionMount, Unauthenticated
from sessiongate.shared.infrastructure.identity import MsalIdentityClient
from tests.helpers.fakes import FakeMsalApp

ALICE_ACCOUNT = {"home_account_id": "alice-oid.tenant", "username": "alice@contoso.com"}


@pytest.fixture
def config() -> IdentityConfig:
    return IdentityConfig(client_id="client-123", redirect_uri="http://localhost:3000")


def test_kind_mapping_is_closed(alice):
    assert provider_event_from_kind(KIND_LOGIN_SUCCESS, alice) == LoginSucceeded(alice)
    assert provider_event_from_kind(KIND_LOGOUT_SUCCESS) == LogoutSucceeded()
    assert provider_event_from_kind("msal:brandNewEvent") == OtherEvent(kind="msal:brandNewEvent")


def test_login_success_without_identity_is_not_reconciled():
    assert isinstance(provider_event_from_kind(KIND_LOGIN_SUCCESS), OtherEvent)


def test_missing_client_id_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        MsalIdentityClient(IdentityConfig())


def test_enumerate_returns_stable_identity_objects(config):
    client = MsalIdentityClient(config, app=FakeMsalApp(accounts=[dict(ALICE_ACCOUNT)]))

    first = client.enumerate_accounts()
    second = client.enumerate_accounts()

    assert [i.username for i in first] == ["alice@contoso.com"]
    assert first[0] is second[0]


def test_unsubscribe_is_idempotent(config):
    client = MsalIdentityClient(config, app=FakeMsalApp())
    received = []
    handle = client.subscribe(received.append)

    client.unsubscribe(handle)
    client.unsubscribe(handle)
    client.emit(KIND_LOGOUT_SUCCESS)

    assert received == []


@pytest.mark.asyncio
async def test_login_emits_login_succeeded_with_cached_identity(config):
    app = FakeMsalApp(
        interactive_result={"access_token": "t", "id_token_claims": {"preferred_username": "alice@contoso.com"}},
        account_after_login=dict(ALICE_ACCOUNT),
    )
    client = MsalIdentityClient(config, app=app)
    received = []
    client.subscribe(received.append)

    await client.begin_login()

    assert received[0] == OtherEvent(kind=KIND_LOGIN_START)
    assert isinstance(received[-1], LoginSucceeded)
    assert received[-1].identity is client.enumerate_accounts()[0]
    assert app.interactive_kwargs["scopes"] == ["User.Read"]
    assert app.interactive_kwargs["port"] == 3000


@pytest.mark.asyncio
async def test_login_error_result_raises_initiation_error(config):
    app = FakeMsalApp(interactive_result={"error": "access_denied", "error_description": "User cancelled"})
    client = MsalIdentityClient(config, app=app)
    received = []
    client.subscribe(received.append)

    with pytest.raises(InitiationError) as excinfo:
        await client.begin_login()

    assert excinfo.value.message == "User cancelled"
    assert excinfo.value.details["error"] == "access_denied"
    assert received[-1].kind == KIND_LOGIN_FAILURE


@pytest.mark.asyncio
async def test_login_exception_is_wrapped(config):
    client = MsalIdentityClient(config, app=FakeMsalApp(interactive_error=OSError("no browser")))

    with pytest.raises(InitiationError) as excinfo:
        await client.begin_login()

    assert isinstance(excinfo.value.__cause__, OSError)


@pytest.mark.asyncio
async def test_logout_removes_accounts_and_emits(config):
    app = FakeMsalApp(accounts=[dict(ALICE_ACCOUNT)])
    client = MsalIdentityClient(config, app=app)
    received = []
    client.subscribe(received.append)

    await client.begin_logout()

    assert app.accounts == []
    assert [a["username"] for a in app.removed] == ["alice@contoso.com"]
    assert received[-1] == LogoutSucceeded()


@pytest.mark.asyncio
async def test_mount_over_msal_client_end_to_end(config, alice, diagnostics):
    app = FakeMsalApp(
        interactive_result={"access_token": "t"},
        account_after_login=dict(ALICE_ACCOUNT),
    )
    client = MsalIdentityClient(config, app=app)
    mount = SessionMount(client, diagnostics=diagnostics)

    mount.mount()
    assert isinstance(mount.current_state(), Unauthenticated)

    assert (await mount.trigger_login()).ok
    assert isinstance(mount.current_state(), Authenticated)
    assert mount.current_state().username == "alice@contoso.com"

    assert (await mount.trigger_logout()).ok
    assert isinstance(mount.current_state(), Unauthenticated)

    mount.unmount()
    client.emit(KIND_LOGIN_SUCCESS, identity=alice)
    assert isinstance(mount.current_state(), Unauthenticated)
    assert diagnostics.reports == []
