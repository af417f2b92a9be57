"""Protocols for collaborators outside the store.

The store never depends on a UI toolkit. It only needs:
    - a form serializer producing ordered ``{"name": ..., "value": ...}`` pairs,
    - optionally, a selector that wraps or looks up view elements.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

type FieldPair = Mapping[str, Any]
"""One serialized form field: ``{"name": field_name, "value": field_value}``."""


@runtime_checkable
class FormSerializer(Protocol):
    """Form-like object able to serialize its fields in document order."""

    def serialize_array(self) -> Iterable[FieldPair]:
        """Return the fields as name/value pairs."""
        ...


@runtime_checkable
class Selector(Protocol):
    """Resolves a selector expression or element into a wrapped element."""

    def __call__(self, element: Any) -> Any: ...
