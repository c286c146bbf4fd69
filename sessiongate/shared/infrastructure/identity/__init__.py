"""Identity provider adapters."""

from .msal_client import MsalIdentityClient

__all__ = ["MsalIdentityClient"]
