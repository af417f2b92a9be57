"""Composition functionality: Module base type, capabilities, dual surfaces."""

from corral.core.compose.core import Capability, Module, Receivers, capability_members
from corral.core.compose.models import RESERVED_HOOKS, Surface, is_reserved

__all__ = [
    "Capability",
    "Module",
    "Receivers",
    "RESERVED_HOOKS",
    "Surface",
    "capability_members",
    "is_reserved",
]
