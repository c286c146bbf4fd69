"""SessionGate package."""

from .shared.core.event_bus import EventBus
from .shared.domain.session import SessionMount

__all__ = ["EventBus", "SessionMount"]
