"""IdentityClient adapter over MSAL for Python.

MSAL owns the protocol flow and the token cache. This adapter adds what the
session core needs on top of it: a subscription registry and provider events
raised when a login or logout flow finishes.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import msal

from sessiongate.shared.core.configuration import IdentityConfig
from sessiongate.shared.core.errors import ConfigurationError, InitiationError
from sessiongate.shared.domain.identity import events as provider_events
from sessiongate.shared.domain.identity.models import Identity, SubscriptionHandle
from sessiongate.shared.domain.identity.protocols import ProviderCallback

logger = logging.getLogger(__name__)


class MsalIdentityClient:
    """Identity client backed by `msal.PublicClientApplication`.

    The interactive flow opens the system browser and waits on a loopback
    redirect, so it runs in a worker thread. Events are emitted after the
    await returns, i.e. on the caller's event loop.
    """

    def __init__(
        self,
        config: IdentityConfig,
        app: Optional[msal.PublicClientApplication] = None,
    ) -> None:
        if app is None:
            if not config.client_id:
                raise ConfigurationError(
                    "identity.client_id is not set (SESSIONGATE_CLIENT_ID)",
                    details={"section": "identity", "key": "client_id"},
                )
            app = msal.PublicClientApplication(config.client_id, authority=config.authority)
        self.app = app
        self.config = config
        self._callbacks: Dict[SubscriptionHandle, ProviderCallback] = {}
        # One Identity object per account, so repeated reads hand out the same reference
        self._identities: Dict[str, Identity] = {}

    # --- Accounts ---

    def enumerate_accounts(self) -> List[Identity]:
        return [self._identity_for(account) for account in self.app.get_accounts()]

    def _identity_for(self, account: Dict[str, Any]) -> Identity:
        username = account.get("username") or ""
        key = account.get("home_account_id") or username
        cached = self._identities.get(key)
        if cached is None or cached.username != username:
            cached = Identity(home_account_id=key, username=username, claims=dict(account))
            self._identities[key] = cached
        return cached

    def _identity_from_result(self, result: Dict[str, Any]) -> Optional[Identity]:
        claims = result.get("id_token_claims") or {}
        preferred = claims.get("preferred_username")
        accounts = self.enumerate_accounts()
        for identity in accounts:
            if preferred and identity.username == preferred:
                return identity
        if accounts:
            return accounts[0]
        if preferred:
            key = f"{claims.get('oid', '')}.{claims.get('tid', '')}"
            identity = Identity(home_account_id=key, username=preferred, claims=claims)
            self._identities[key] = identity
            return identity
        return None

    # --- Subscriptions ---

    def subscribe(self, callback: ProviderCallback) -> SubscriptionHandle:
        handle = SubscriptionHandle(uuid.uuid4().hex)
        self._callbacks[handle] = callback
        logger.debug(f"Registered provider callback {handle}")
        return handle

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        if self._callbacks.pop(handle, None) is not None:
            logger.debug(f"Removed provider callback {handle}")

    def emit(
        self,
        kind: str,
        identity: Optional[Identity] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Deliver a provider event to every registered callback."""
        event = provider_events.provider_event_from_kind(kind, identity, payload)
        for handle, callback in list(self._callbacks.items()):
            try:
                callback(event)
            except Exception:
                logger.exception(f"Provider callback {handle} failed on '{kind}'")

    # --- Flows ---

    async def begin_login(self) -> None:
        """Run the interactive login flow.

        Raises:
            InitiationError: If the browser flow could not be started or
                the provider returned an error
        """
        self.emit(provider_events.KIND_LOGIN_START)
        try:
            result = await asyncio.to_thread(
                self.app.acquire_token_interactive,
                list(self.config.scopes),
                prompt=msal.Prompt.SELECT_ACCOUNT,
                port=urlparse(self.config.redirect_uri).port,
                timeout=self.config.login_timeout,
            )
        except Exception as exc:
            self.emit(provider_events.KIND_LOGIN_FAILURE, payload={"error": type(exc).__name__})
            raise InitiationError("login", f"Login flow could not start: {exc}") from exc

        if "error" in result:
            error = result.get("error")
            self.emit(provider_events.KIND_LOGIN_FAILURE, payload={"error": error})
            raise InitiationError(
                "login",
                result.get("error_description") or str(error),
                details={"error": error},
            )

        identity = self._identity_from_result(result)
        self.emit(provider_events.KIND_LOGIN_SUCCESS, identity=identity)

    async def begin_logout(self) -> None:
        """Remove every cached account and report the logout."""
        self.emit(provider_events.KIND_LOGOUT_START)
        try:
            accounts = await asyncio.to_thread(self.app.get_accounts)
            for account in accounts:
                await asyncio.to_thread(self.app.remove_account, account)
        except Exception as exc:
            self.emit(provider_events.KIND_LOGOUT_FAILURE, payload={"error": type(exc).__name__})
            raise InitiationError("logout", f"Logout failed: {exc}") from exc

        self._identities.clear()
        self.emit(provider_events.KIND_LOGOUT_SUCCESS)
