"""FletXr reactive state for the portal shell."""

from .portal_state import PortalState

__all__ = ["PortalState"]
