"""Model: observable record type backed by a dual-indexed store.

Usage:
    class Item(Model):
        def validate(self):
            if not self.name:
                return "name is required"

    Item.configure("Item", "name", "price")

    Item.bind("change", lambda record, kind, options: print(kind, record))
    pen = Item.create({"name": "Pen", "price": 1})
    pen.price = 2
    pen.save()
    Item.find(pen.id).destroy()

Lifecycle:
    New --create--> Persisted --destroy--> Destroyed (terminal)
    update is a Persisted -> Persisted transition.

Every operation that hands a record back returns a projection: an instance of
the same type whose reads fall through to the stored (canonical) record and
whose writes stay local until saved.
"""

from __future__ import annotations

import inspect
import json
import warnings
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from corral.adapters import FieldPair, FormSerializer, form_pairs
from corral.core.compose import Module
from corral.core.events import Events
from corral.core.events.names import (
    BEFORE_CREATE,
    BEFORE_DESTROY,
    BEFORE_SAVE,
    BEFORE_UPDATE,
    CHANGE,
    CREATE,
    DESTROY,
    ERROR,
    SAVE,
    UPDATE,
)
from corral.core.identity import has_identity
from corral.core.types import Projection
from corral.errors import UnknownRecordError
from corral.model.events import RecordEvents
from corral.model.operations import StoreOperations

if TYPE_CHECKING:
    from corral.storage import RecordStorage

# Mangled form of Model.__source: a projection's back-reference to its record.
_SOURCE = "_Model__source"
_CID = "cid"


class Model(Module, extend=(Events, StoreOperations), include=(RecordEvents,)):
    """Base type for records.

    Type surface (``Item.find``, ``Item.create``, ``Item.bind``...) comes from
    StoreOperations and Events; instance surface (``record.save``,
    ``record.bind``...) is defined here and in RecordEvents.

    Args:
        attrs: Initial attributes. A ``cid`` entry is ignored: client ids are
            always minted by the store so they never collide.
        **kwargs: More attributes, applied after attrs.
    """

    class_name: ClassVar[str] = "Model"
    attribute_names: ClassVar[tuple[str, ...]] = ()
    _store: ClassVar[RecordStorage[Model] | None] = None

    id: Any
    cid: str
    destroyed: bool

    def __init__(self, attrs: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        self._initialize({**(attrs or {}), **kwargs})

    def _initialize(self, values: Mapping[str, Any], cid: str | None = None) -> None:
        self.id = None
        self.destroyed = False
        if values:
            self.load(values)
        self.cid = cid or type(self).mint_client_id()

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails: read through to the source record.
        source = self.__dict__.get(_SOURCE)
        if source is None or (name.startswith("__") and name.endswith("__")):
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return getattr(source, name)

    def __repr__(self) -> str:
        return f"<{type(self).class_name} ({json.dumps(self.attributes(), default=repr)})>"

    # Attributes

    def load(self, attrs: Mapping[str, Any]) -> Model:
        """Assign attributes from a mapping.

        Names resolving to a method are called with the value instead of
        being overwritten. A callable value for such a name is skipped with a
        warning. ``cid`` is never assigned: client ids belong to the store.

        Args:
            attrs: Attribute mapping.

        Returns:
            This record.
        """
        for key, value in attrs.items():
            if key == _CID:
                continue
            current = getattr(self, key, None)
            if inspect.ismethod(current):
                if callable(value):
                    warnings.warn(
                        f"load() skipped callable value for method {key!r} of "
                        f"{type(self).class_name}",
                        stacklevel=2,
                    )
                else:
                    current(value)
            else:
                setattr(self, key, value)
        return self

    def attributes(self) -> dict[str, Any]:
        """Serialize the declared attributes plus ``id`` when set.

        Declared names resolving to a method are called with no arguments.
        Declared names never assigned are left out.

        Returns:
            Plain attribute dict.
        """
        result: dict[str, Any] = {}
        for key in type(self).attribute_names:
            try:
                value = getattr(self, key)
            except AttributeError:
                continue
            result[key] = value() if inspect.ismethod(value) else value
        if has_identity(self.id):
            result["id"] = self.id
        return result

    def to_json(self) -> str:
        return json.dumps(self.attributes())

    def from_form(self, form: FormSerializer | Iterable[FieldPair]) -> Model:
        """Load attributes from serialized form fields."""
        return self.load(form_pairs(form))

    # State

    def is_new(self) -> bool:
        return not (has_identity(self.id) and type(self).storage().has_id(self.id))

    def validate(self) -> Any:
        """Validation hook; return a non-empty value to reject a save."""
        return None

    def is_valid(self) -> bool:
        return not self.validate()

    def equals(self, other: Any) -> bool:
        """Check whether other denotes the same record.

        Same type, and either the same client id or the same non-empty
        persisted id. The two checks are independent: a record with an id can
        still equal an unsaved record sharing its client id.
        """
        if other is None or type(other) is not type(self):
            return False
        if other.cid == self.cid:
            return True
        return has_identity(self.id) and has_identity(other.id) and other.id == self.id

    # Copies

    def duplicate(self, new_record: bool = True) -> Model:
        """Build an unsaved record from this record's attributes.

        Args:
            new_record: True strips the id (a new identity, cid minted later).
                False keeps this record's cid instead.

        Returns:
            Detached record, not in the store.
        """
        attrs = self.attributes()
        if new_record:
            attrs.pop("id", None)
            return type(self)(attrs)
        record = object.__new__(type(self))
        record._initialize(attrs, cid=self.cid)
        return record

    def clone(self) -> Projection[Model]:
        """Return a projection: reads go to this record, writes stay on the projection."""
        projection = object.__new__(type(self))
        projection.__dict__[_SOURCE] = self
        return projection

    # Lifecycle

    def save(self, **options: Any) -> Any:
        """Validate, then create or update.

        Pass ``validate=False`` to skip the validate() hook. A non-empty
        validation result triggers ``error`` and the store is left untouched.

        Returns:
            Projection of the saved record, or False if validation failed.
        """
        if options.get("validate", True):
            error = self.validate()
            if error:
                self.trigger(ERROR, error)
                return False
        self.trigger(BEFORE_SAVE, options)
        record = self.create(**options) if self.is_new() else self.update(**options)
        record.trigger(SAVE, options)
        return record

    def create(self, **options: Any) -> Projection[Model]:
        """Insert a copy of this record into the store.

        The record's id defaults to its cid. Triggers ``beforeCreate``,
        ``create`` and ``change`` with tag ``"create"``.

        Returns:
            Projection of the stored record.
        """
        self.trigger(BEFORE_CREATE, options)
        if not has_identity(self.id):
            self.id = self.cid
        record = self.duplicate(new_record=False)
        type(self).storage().insert(record)
        projection = record.clone()
        projection.trigger(CREATE, options)
        projection.trigger(CHANGE, CREATE, options)
        return projection

    def update(self, **options: Any) -> Projection[Model]:
        """Copy this record's attributes onto the stored record.

        Triggers ``beforeUpdate``, ``update`` and ``change`` with tag ``"update"``.

        Returns:
            Projection of the updated stored record.

        Raises:
            UnknownRecordError: If the stored record is gone; nothing is triggered.
        """
        canonical = type(self).storage().get(self.id)
        if canonical is None:
            raise UnknownRecordError(
                f'"{type(self).class_name}" record "{self.id}" no longer exists and cannot be updated'
            )
        self.trigger(BEFORE_UPDATE, options)
        canonical.load(self.attributes())
        projection = canonical.clone()
        projection.trigger(UPDATE, options)
        projection.trigger(CHANGE, UPDATE, options)
        return projection

    def destroy(self, **options: Any) -> Model:
        """Remove the stored record and sever this record's subscriptions.

        Triggers ``beforeDestroy``, ``destroy``, ``change`` with tag
        ``"destroy"``, then ``unbind``.

        Returns:
            This record, now detached and flagged destroyed.

        Raises:
            UnknownRecordError: If the stored record is gone; nothing is triggered.
        """
        store = type(self).storage()
        canonical = store.locate(self)
        if canonical is None:
            raise UnknownRecordError(
                f'"{type(self).class_name}" record "{self.id or self.cid}" no longer exists and '
                "cannot be destroyed"
            )
        self.trigger(BEFORE_DESTROY, options)
        store.remove(canonical)
        self.destroyed = True
        self.trigger(DESTROY, options)
        self.trigger(CHANGE, DESTROY, options)
        self.unbind()
        return self

    def update_attribute(self, name: str, value: Any, **options: Any) -> Any:
        setattr(self, name, value)
        return self.save(**options)

    def update_attributes(self, attrs: Mapping[str, Any], **options: Any) -> Any:
        self.load(attrs)
        return self.save(**options)

    def change_id(self, new_id: Any) -> Any:
        """Re-key the stored record under new_id and save.

        The re-key is undone when the save is rejected by validation, so the
        store never holds a record under an id it does not carry.

        Returns:
            Projection of the saved record, or False if validation failed.

        Raises:
            KeyError: If this record is not stored.
            ValueError: If new_id is already used by another record.
        """
        store = type(self).storage()
        old_id = self.id
        store.rekey(old_id, new_id)
        self.id = new_id
        result = self.save()
        if result is False:
            store.rekey(new_id, old_id)
            self.id = old_id
        return result

    def reload(self) -> Model:
        """Pull the stored attributes into this record.

        Returns:
            This record if it is new, else a fresh projection of the stored record.
        """
        if self.is_new():
            return self
        original = type(self).find(self.id)
        self.load(original.attributes())
        return original
