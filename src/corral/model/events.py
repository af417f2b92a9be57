"""Record-scoped events: instance subscriptions filtered from the type-level bus.

A record has no registry of its own. ``record.bind(name, cb)`` registers on
the record's type and only forwards payloads equal to the record. Each such
subscription brings a companion on the type's ``unbind`` event which removes
both once the record triggers ``unbind`` (``destroy`` does).
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from corral.core.events import Callback, matches_callback
from corral.core.events.names import UNBIND

if TYPE_CHECKING:
    from corral.model.model import Model

_BINDINGS = "_bindings"


@dataclass(slots=True, eq=False)
class Binding:
    """One instance subscription and the type-level callbacks backing it."""

    names: str
    callback: Callback
    binder: Callback
    unbinder: Callback

    def matches(self, names: str, callback: Callback | None) -> bool:
        if self.names != names:
            return False
        if callback is None:
            return True
        return matches_callback(self.callback, callback)


def _bindings(record: Any) -> list[Binding]:
    return vars(record).setdefault(_BINDINGS, [])


class RecordEvents:
    """Instance-surface events for Model records."""

    def bind(self: Model, names: str, callback: Callback) -> Model:
        """Subscribe to type-level events whose payload equals this record.

        Args:
            names: Whitespace-separated event names.
            callback: Called with ``(record, *args)`` for matching payloads.

        Returns:
            The record.
        """
        model = type(self)
        binding: Binding

        def binder(record: Any = None, *args: Any) -> Any:
            if record is not None and self.equals(record):
                return callback(record, *args)
            return None

        def unbinder(record: Any = None, *args: Any) -> None:
            if record is not None and self.equals(record):
                model.unbind(names, binder)
                model.unbind(UNBIND, unbinder)
                bindings = _bindings(self)
                if binding in bindings:
                    bindings.remove(binding)

        binding = Binding(names=names, callback=callback, binder=binder, unbinder=unbinder)
        model.bind(names, binder)
        model.bind(UNBIND, unbinder)
        _bindings(self).append(binding)
        return self

    def one(self: Model, names: str, callback: Callback) -> Model:
        """Subscribe for at most one matching payload."""

        @functools.wraps(callback)
        def handler(record: Any, *args: Any) -> Any:
            self.unbind(names, handler)
            return callback(record, *args)

        return self.bind(names, handler)

    def trigger(self: Model, name: str, *args: Any) -> bool:
        """Trigger name on the record's type with this record as first argument."""
        return type(self).trigger(name, self, *args)

    def unbind(self: Model, names: str | None = None, callback: Callback | None = None) -> Model:
        """Remove subscriptions made through this record.

        Without arguments, triggers ``unbind`` for this record, detaching every
        record-scoped subscription for its identity. With names (and
        optionally callback), removes only the matching subscriptions made
        through this object.

        Args:
            names: Event names exactly as passed to bind, or None for all.
            callback: Specific callback to remove.

        Returns:
            The record.
        """
        if names is None:
            self.trigger(UNBIND)
            return self
        model = type(self)
        bindings = _bindings(self)
        for binding in list(bindings):
            if binding.matches(names, callback):
                model.unbind(binding.names, binding.binder)
                model.unbind(UNBIND, binding.unbinder)
                bindings.remove(binding)
                if callback is not None:
                    break
        return self
