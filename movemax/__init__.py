"""MoveMax corporate relocation operations package."""

from .shared.core.event_bus import EventBus
from .app.state.store import Store

__all__ = ["EventBus", "Store"]
