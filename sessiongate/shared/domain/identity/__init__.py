"""Identity provider types and client protocol."""

from .events import KIND_LOGIN_SUCCESS, KIND_LOGOUT_SUCCESS, provider_event_from_kind
from .models import (
    Identity,
    LoginSucceeded,
    LogoutSucceeded,
    OtherEvent,
    ProviderEvent,
    SubscriptionHandle,
)
from .protocols import IdentityClient, ProviderCallback

__all__ = [
    "Identity",
    "IdentityClient",
    "KIND_LOGIN_SUCCESS",
    "KIND_LOGOUT_SUCCESS",
    "LoginSucceeded",
    "LogoutSucceeded",
    "OtherEvent",
    "ProviderCallback",
    "ProviderEvent",
    "SubscriptionHandle",
    "provider_event_from_kind",
]
