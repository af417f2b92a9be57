"""Composition models: the dual-surface descriptor and reserved hook names.

A type has two surfaces: the instance surface (what instances see) and the
type surface (what the type itself sees). ``Surface`` lets one attribute name
carry a behavior on each, so ``Item.create(attrs)`` and ``record.create()`` can
coexist without a shared base class.
"""

from __future__ import annotations

from types import FunctionType, MethodType
from typing import Any, Final

RESERVED_HOOKS: Final = frozenset({"included", "extended"})

_MISSING: Any = object()


def is_reserved(name: str) -> bool:
    """Check whether a capability member must not be copied.

    Args:
        name: Member name on a capability object.

    Returns:
        True for dunder names and lifecycle hooks.
    """
    return (name.startswith("__") and name.endswith("__")) or name in RESERVED_HOOKS


def _bind_to_type(value: Any, owner: type) -> Any:
    if isinstance(value, FunctionType):
        return MethodType(value, owner)
    if isinstance(value, (classmethod, staticmethod)):
        return value.__get__(None, owner)
    return value


def _bind_to_instance(value: Any, obj: Any, owner: type) -> Any:
    if hasattr(type(value), "__get__"):
        return value.__get__(obj, owner)
    return value


class Surface:
    """Non-data descriptor holding an instance behavior and a type behavior.

    Resolution:
        - on an instance: the instance behavior bound to the instance. A type
          behavior is never visible from instances, as with static members.
        - on the type: the type behavior bound to the type, else the raw
          instance behavior (like a plain function looked up on its class).

    Being a non-data descriptor, values stored in an instance ``__dict__`` under
    the same name shadow it.
    """

    __slots__ = ("name", "instance_behavior", "type_behavior")

    def __init__(
        self,
        name: str,
        instance_behavior: Any = _MISSING,
        type_behavior: Any = _MISSING,
    ) -> None:
        self.name = name
        self.instance_behavior = instance_behavior
        self.type_behavior = type_behavior

    @property
    def has_instance_behavior(self) -> bool:
        return self.instance_behavior is not _MISSING

    @property
    def has_type_behavior(self) -> bool:
        return self.type_behavior is not _MISSING

    def copy(self) -> Surface:
        """Return an independent surface with the same behaviors."""
        return Surface(self.name, self.instance_behavior, self.type_behavior)

    def __get__(self, obj: Any, owner: type | None = None) -> Any:
        if owner is None:
            owner = type(obj)
        if obj is not None:
            if self.has_instance_behavior:
                return _bind_to_instance(self.instance_behavior, obj, owner)
            raise AttributeError(f"{owner.__name__!r} object has no attribute {self.name!r}")
        if self.has_type_behavior:
            return _bind_to_type(self.type_behavior, owner)
        if self.has_instance_behavior:
            return _bind_to_instance(self.instance_behavior, None, owner)
        raise AttributeError(f"{owner.__name__!r} has no behavior named {self.name!r}")

    def __repr__(self) -> str:
        sides = [
            side
            for side, present in (
                ("instance", self.has_instance_behavior),
                ("type", self.has_type_behavior),
            )
            if present
        ]
        return f"<Surface {self.name!r} ({', '.join(sides) or 'empty'})>"
