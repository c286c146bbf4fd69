"""Mapping from provider event kind strings to the closed ProviderEvent variant."""

from __future__ import annotations

from typing import Any, Dict, Optional

from .models import Identity, LoginSucceeded, LogoutSucceeded, OtherEvent, ProviderEvent

# Provider event kinds (MSAL vocabulary)
KIND_LOGIN_SUCCESS = "msal:loginSuccess"
KIND_LOGOUT_SUCCESS = "msal:logoutSuccess"
KIND_LOGIN_START = "msal:loginStart"
KIND_LOGIN_FAILURE = "msal:loginFailure"
KIND_LOGOUT_START = "msal:logoutStart"
KIND_LOGOUT_FAILURE = "msal:logoutFailure"
KIND_ACQUIRE_TOKEN_SUCCESS = "msal:acquireTokenSuccess"
KIND_ACQUIRE_TOKEN_FAILURE = "msal:acquireTokenFailure"


def provider_event_from_kind(
    kind: str,
    identity: Optional[Identity] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> ProviderEvent:
    """Convert a raw provider notification into a ProviderEvent.

    A login success without an identity cannot be reconciled into an
    authenticated session, so it is passed on as an OtherEvent.
    """
    if kind == KIND_LOGIN_SUCCESS and identity is not None:
        return LoginSucceeded(identity)
    if kind == KIND_LOGOUT_SUCCESS:
        return LogoutSucceeded()
    return OtherEvent(kind=kind, payload=payload)
