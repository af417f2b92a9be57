"""Publish/subscribe capability.

Usage:
    bus = EventBus()
    bus.bind("save destroy", on_record)
    bus.one("refresh", on_first_refresh)
    bus.trigger("save", record)
    bus.unbind("save", on_record)

    # Type-level bus on a Module subclass
    class Note(Module, extend=(Events,)):
        pass

    Note.bind("change", observer)

Registries are copy-on-write: bind and unbind install a new list instead of
mutating the one a running trigger iterates over.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Any, Self

from corral.core.compose import Module

logger = logging.getLogger(__name__)

type Callback = Callable[..., Any]

_REGISTRY = "_callbacks"


def split_names(names: str) -> list[str]:
    """Split a whitespace-separated list of event names."""
    return names.split()


def own_registry(receiver: Any) -> dict[str, list[Callback]]:
    """Return the registry stored on receiver itself, creating it on first use.

    Looked up in ``vars(receiver)`` so a subclass never sees its base
    type's registry through inheritance.

    Args:
        receiver: Type or instance carrying the Events capability.

    Returns:
        Mutable mapping of event name -> callback list.
    """
    registry = vars(receiver).get(_REGISTRY)
    if registry is None:
        registry = {}
        setattr(receiver, _REGISTRY, registry)
    return registry


def matches_callback(candidate: Callback, callback: Callback) -> bool:
    """Check whether a registered callback (or the one it wraps) is callback.

    Compares with ``==`` as well as identity: every ``obj.method`` access
    builds a new bound method, and those compare equal instead.
    """
    if candidate is callback or candidate == callback:
        return True
    wrapped = getattr(candidate, "__wrapped__", None)
    return wrapped is not None and (wrapped is callback or wrapped == callback)


class Events:
    """Event registry capability for types (extend) and instances (include)."""

    def bind(self, names: str, callback: Callback) -> Self:
        """Register callback under every name in a whitespace-separated list.

        Args:
            names: Event names, e.g. ``"create update"``.
            callback: Called with the trigger arguments.

        Returns:
            The receiver.
        """
        registry = own_registry(self)
        for name in split_names(names):
            registry[name] = [*registry.get(name, ()), callback]
        return self

    def one(self, names: str, callback: Callback) -> Self:
        """Register callback for at most one invocation."""

        @functools.wraps(callback)
        def handler(*args: Any) -> Any:
            self.unbind(names, handler)
            return callback(*args)

        return self.bind(names, handler)

    def trigger(self, name: str, *args: Any) -> bool:
        """Invoke every callback bound to name, in bind order.

        A callback returning ``False`` stops the dispatch. Triggering a name
        nobody listens to does nothing.

        Args:
            name: Event name.
            *args: Passed to every callback.

        Returns:
            Always True.
        """
        callbacks = vars(self).get(_REGISTRY, {}).get(name)
        if not callbacks:
            return True
        logger.debug("trigger %s on %r to %d listener(s)", name, self, len(callbacks))
        for callback in callbacks:
            if callback(*args) is False:
                logger.debug("trigger %s on %r cancelled", name, self)
                break
        return True

    def unbind(self, names: str | None = None, callback: Callback | None = None) -> Self:
        """Remove callbacks.

        Without arguments the whole registry is dropped. With names only, every
        callback for those names goes. With names and callback, the first
        callback identical to it (or a ``one`` wrapper around it) is removed.

        Args:
            names: Whitespace-separated event names, or None for all.
            callback: Specific callback to remove.

        Returns:
            The receiver.
        """
        if names is None:
            setattr(self, _REGISTRY, {})
            return self

        registry = own_registry(self)
        for name in split_names(names):
            current = registry.get(name)
            if not current:
                continue
            if callback is None:
                del registry[name]
                continue
            for index, candidate in enumerate(current):
                if matches_callback(candidate, callback):
                    remaining = current[:index] + current[index + 1 :]
                    if remaining:
                        registry[name] = remaining
                    else:
                        del registry[name]
                    break
        return self

    def listeners(self, name: str) -> tuple[Callback, ...]:
        """Snapshot of the callbacks currently bound to name."""
        return tuple(vars(self).get(_REGISTRY, {}).get(name, ()))


class EventBus(Module, include=(Events,)):
    """Standalone event bus for code that is not a model."""

    def __repr__(self) -> str:
        registry = vars(self).get(_REGISTRY, {})
        return f"<EventBus {sorted(registry)}>"
