"""Core functionalities: event bus, capability composition, identity.

Architecture Note:
    core/ holds the building blocks that carry no store state of their own.
    For the stateful record store, see storage/ and model/.
"""

from corral.core.compose import (
    RESERVED_HOOKS,
    Capability,
    Module,
    Receivers,
    Surface,
    capability_members,
)
from corral.core.events import EventBus, Events, names
from corral.core.identity import DEFAULT_CLIENT_ID_PREFIX, has_identity, is_client_id
from corral.core.types import Projection

__all__ = [
    # Types
    "Projection",
    # Composition
    "Capability",
    "Module",
    "Receivers",
    "RESERVED_HOOKS",
    "Surface",
    "capability_members",
    # Events
    "EventBus",
    "Events",
    "names",
    # Identity
    "DEFAULT_CLIENT_ID_PREFIX",
    "has_identity",
    "is_client_id",
]
