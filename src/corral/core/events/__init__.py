"""Event functionality: the Events capability, a standalone bus, event names."""

from corral.core.events import names
from corral.core.events.core import (
    Callback,
    EventBus,
    Events,
    matches_callback,
    own_registry,
    split_names,
)

__all__ = [
    "Callback",
    "EventBus",
    "Events",
    "matches_callback",
    "names",
    "own_registry",
    "split_names",
]
