"""Capability composition: Module base type with include/extend.

Usage:
    class Greeting:
        def greet(self):
            return f"hello from {self!r}"

    class Counter:
        def instances(cls):
            return cls.created

    class Widget(Module, include=(Greeting,), extend=(Counter,)):
        created = 0

    Widget().greet()     # instance surface
    Widget.instances()   # type surface

Capabilities are classes (all members along their MRO) or mappings of
name -> member. Dunder names and the ``included``/``extended`` hooks are never
copied; the hooks are called with the receiving type once copying is done.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable, Mapping
from types import MethodType
from typing import Any, Self

from corral.core.compose.models import _MISSING, Surface, is_reserved
from corral.errors import MissingArgumentError

logger = logging.getLogger(__name__)

type Capability = type | Mapping[str, Any]


def capability_members(capabilities: Capability) -> dict[str, Any]:
    """Collect the copyable members of a capability object.

    Args:
        capabilities: Capability class or mapping.

    Returns:
        Ordered name -> member mapping without reserved names.
    """
    if isinstance(capabilities, Mapping):
        items: Iterable[tuple[str, Any]] = capabilities.items()
    elif isinstance(capabilities, type):
        merged: dict[str, Any] = {}
        for klass in reversed(capabilities.__mro__):
            if klass is object:
                continue
            merged.update(vars(klass))
        items = merged.items()
    else:
        items = vars(capabilities).items()
    return {name: member for name, member in items if not is_reserved(name)}


def _hook(capabilities: Capability, name: str) -> Callable[..., Any] | None:
    if isinstance(capabilities, Mapping):
        hook = capabilities.get(name)
    else:
        hook = inspect.getattr_static(capabilities, name, None)
    if isinstance(hook, (classmethod, staticmethod)):
        hook = hook.__func__
    return hook


def _lookup(mro: Iterable[type], name: str) -> tuple[type | None, Any]:
    for klass in mro:
        if name in vars(klass):
            return klass, vars(klass)[name]
    return None, _MISSING


def _own_surface(cls: type, name: str) -> Surface:
    """Return the Surface stored on cls itself, creating it from what cls resolves."""
    holder, found = _lookup(cls.__mro__, name)
    if isinstance(found, Surface):
        if holder is cls:
            return found
        surface = found.copy()
    elif found is not _MISSING:
        surface = Surface(name, instance_behavior=found)
    else:
        surface = Surface(name)
    setattr(cls, name, surface)
    return surface


def _compose(cls: type, capabilities: Capability | None, *, side: str, hook: str) -> None:
    if capabilities is None:
        raise MissingArgumentError(f"{side}() requires a capabilities object")

    members = capability_members(capabilities)
    for name, member in members.items():
        surface = _own_surface(cls, name)
        if side == "include":
            surface.instance_behavior = member
        else:
            surface.type_behavior = member

    logger.debug(
        "%s %s into %s: %s",
        side,
        getattr(capabilities, "__name__", type(capabilities).__name__),
        cls.__name__,
        ", ".join(members),
    )

    callback = _hook(capabilities, hook)
    if callback is not None:
        MethodType(callback, cls)()


class Module:
    """Base type whose behavior is composed from capabilities.

    Capabilities can be applied at class definition time through class
    keywords, or right after the class body with ``include``/``extend``::

        class Note(Module, include=(Events,), extend=(Events,)):
            ...

    When a subclass body redefines a name whose inherited attribute also has a
    type behavior, the type behavior is kept and the new definition becomes the
    instance behavior.
    """

    def __init_subclass__(
        cls,
        include: Iterable[Capability] = (),
        extend: Iterable[Capability] = (),
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        for name, member in list(vars(cls).items()):
            if is_reserved(name) or isinstance(member, Surface):
                continue
            _, inherited = _lookup(cls.__mro__[1:], name)
            if isinstance(inherited, Surface) and inherited.has_type_behavior:
                setattr(
                    cls,
                    name,
                    Surface(name, instance_behavior=member, type_behavior=inherited.type_behavior),
                )
        for capabilities in extend:
            cls.extend(capabilities)
        for capabilities in include:
            cls.include(capabilities)

    @classmethod
    def include(cls, capabilities: Capability | None) -> type[Self]:
        """Copy capabilities onto the instance surface of this type.

        Every current and future instance gains the behavior. Calls
        ``capabilities.included`` with this type as receiver afterwards.

        Args:
            capabilities: Capability class or mapping.

        Returns:
            This type, for chaining.

        Raises:
            MissingArgumentError: If capabilities is None.
        """
        _compose(cls, capabilities, side="include", hook="included")
        return cls

    @classmethod
    def extend(cls, capabilities: Capability | None) -> type[Self]:
        """Copy capabilities onto the type surface of this type.

        Calls ``capabilities.extended`` with this type as receiver afterwards.

        Args:
            capabilities: Capability class or mapping.

        Returns:
            This type, for chaining.

        Raises:
            MissingArgumentError: If capabilities is None.
        """
        _compose(cls, capabilities, side="extend", hook="extended")
        return cls


class Receivers:
    """Capability giving types and instances ``bound_receiver``."""

    def bound_receiver(self, func: Callable[..., Any]) -> MethodType:
        """Fix the receiver of func to this type or instance.

        The result keeps calling func with the same receiver no matter where it
        is invoked from (timers, callbacks handed to other objects).

        Args:
            func: Plain function taking the receiver as first argument.

        Returns:
            Bound method of func on the receiver.
        """
        return MethodType(func, self)


Module.include(Receivers).extend(Receivers)
