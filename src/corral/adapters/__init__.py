"""Boundary adapters for collaborators outside the store (forms, view selection)."""

from corral.adapters.protocol import FieldPair, FormSerializer, Selector
from corral.adapters.selection import form_pairs, passthrough_selector, resolve_selector

__all__ = [
    "FieldPair",
    "FormSerializer",
    "Selector",
    "form_pairs",
    "passthrough_selector",
    "resolve_selector",
]
