"""Type-level store operations, extended onto Model.

Every function here receives the model type as its first argument. Anything
returned to a caller is a projection; canonical records never leave this
module and ``corral.model.model``.
"""

from __future__ import annotations

import json
import logging
import warnings
from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from corral.config import get_settings
from corral.core.events.names import CHANGE, REFRESH
from corral.core.identity import has_identity
from corral.core.types import Projection
from corral.errors import UnconfiguredModelError, UnknownRecordError
from corral.storage import RecordStorage, RecordStore

if TYPE_CHECKING:
    from corral.model.model import Model

logger = logging.getLogger(__name__)

type RecordInput = str | bytes | Mapping[str, Any] | Model | Iterable[Mapping[str, Any] | Model]


class StoreOperations:
    """Type surface of Model: configuration, finders, bulk operations."""

    def configure(
        cls: type[Model],
        name: str,
        *attributes: str,
        storage: RecordStorage[Model] | None = None,
    ) -> type[Model]:
        """Make a model type usable, or reset it.

        Installs an empty store, declares the attribute names and drops every
        type-level subscription.

        Args:
            name: Class name used in messages and repr.
            *attributes: Declared attribute names, in serialization order.
            storage: Store to use instead of a fresh RecordStore.

        Returns:
            The model type.
        """
        if len(set(attributes)) != len(attributes):
            warnings.warn(
                f"configure() received duplicate attribute names for {name}: {attributes}",
                stacklevel=2,
            )
        cls.class_name = name
        cls.attribute_names = tuple(dict.fromkeys(attributes))
        if storage is None:
            storage = RecordStore(prefix=get_settings().client_id_prefix)
        cls._store = storage
        cls.unbind()
        logger.debug("configured %s with attributes %s", name, cls.attribute_names)
        return cls

    def setup(cls: type[Model], name: str, *attributes: str) -> type[Model]:
        """Create a subclass named name and configure it in one step."""
        model = type(name, (cls,), {"__module__": cls.__module__})
        return model.configure(name, *attributes)

    def storage(cls: type[Model]) -> RecordStorage[Model]:
        """Return the store installed by configure().

        Internal: the store holds canonical records. Code outside the model
        layer should use the finders, which return projections.

        Raises:
            UnconfiguredModelError: If configure() was never called on this type.
        """
        store = vars(cls).get("_store")
        if store is None:
            raise UnconfiguredModelError(
                f"{cls.__name__} must be configured before use; call {cls.__name__}.configure()"
            )
        return store

    def mint_client_id(cls: type[Model], prefix: str | None = None) -> str:
        """Mint a client id no record of this type currently uses."""
        return cls.storage().mint_client_id(prefix)

    # Finders

    def find(cls: type[Model], record_id: Hashable) -> Projection[Model]:
        """Look a record up by id, falling back to client id.

        Args:
            record_id: Persisted id, or a client id.

        Returns:
            Projection of the canonical record.

        Raises:
            UnknownRecordError: If no record matches.
        """
        store = cls.storage()
        record = store.get(record_id)
        if record is None and store.is_client_id(record_id):
            record = store.get_cid(record_id)
        if record is None:
            raise UnknownRecordError(
                f'"{cls.class_name}" model could not find a record for the ID "{record_id}"'
            )
        return record.clone()

    def find_cid(cls: type[Model], cid: Hashable) -> Projection[Model]:
        """Look a record up by client id only.

        Raises:
            UnknownRecordError: If no record has that client id.
        """
        record = cls.storage().get_cid(cid)
        if record is None:
            raise UnknownRecordError(
                f'"{cls.class_name}" model could not find a record for the client ID "{cid}"'
            )
        return record.clone()

    def exists(cls: type[Model], record_id: Hashable) -> bool:
        """Probe for a record without raising."""
        try:
            cls.find(record_id)
        except UnknownRecordError:
            return False
        return True

    def records_values(cls: type[Model]) -> list[Projection[Model]]:
        return [record.clone() for record in cls.storage().values()]

    def all(cls: type[Model]) -> list[Projection[Model]]:
        return cls.records_values()

    def first(cls: type[Model]) -> Projection[Model] | None:
        values = cls.storage().values()
        return values[0].clone() if values else None

    def last(cls: type[Model]) -> Projection[Model] | None:
        values = cls.storage().values()
        return values[-1].clone() if values else None

    def count(cls: type[Model]) -> int:
        return len(cls.storage())

    def select(cls: type[Model], predicate: Callable[[Model], Any]) -> list[Projection[Model]]:
        """Projections of every record the predicate accepts.

        The predicate itself receives projections, so it cannot alter stored
        records either.
        """
        result = []
        for record in cls.storage().values():
            projection = record.clone()
            if predicate(projection):
                result.append(projection)
        return result

    def find_by_attribute(cls: type[Model], name: str, value: Any) -> Projection[Model] | None:
        """First record whose attribute name equals value, or None."""
        for record in cls.storage().values():
            if getattr(record, name, None) == value:
                return record.clone()
        return None

    def find_all_by_attribute(cls: type[Model], name: str, value: Any) -> list[Projection[Model]]:
        return cls.select(lambda record: getattr(record, name, None) == value)

    def each(cls: type[Model], callback: Callable[[Model], Any]) -> None:
        for record in cls.storage().values():
            callback(record.clone())

    # Bulk operations

    def refresh(cls: type[Model], values: RecordInput | None, *, clear: bool = False) -> type[Model]:
        """Load records straight into the store, bypassing the create cascade.

        Records without an id get their client id as id. Triggers a single
        ``refresh`` event with projections of the loaded records.

        Args:
            values: A mapping, a sequence of mappings, or JSON text of either.
            clear: Empty the store first.

        Returns:
            The model type.
        """
        store = cls.storage()
        if clear:
            store.clear()
        records = cls.from_json(values)
        if not isinstance(records, list):
            records = [records]
        for record in records:
            if not has_identity(record.id):
                record.id = record.cid
            store.insert(record)
        logger.debug("refreshed %s with %d record(s)", cls.class_name, len(records))
        cls.trigger(REFRESH, [record.clone() for record in records])
        return cls

    def delete_all(cls: type[Model]) -> None:
        """Drop every record without firing per-record events."""
        store = cls.storage()
        logger.debug("deleting %d %s record(s)", len(store), cls.class_name)
        store.clear()

    def destroy_all(cls: type[Model], **options: Any) -> None:
        """Destroy records one by one, each with its full event cascade."""
        for record in cls.storage().values():
            record.clone().destroy(**options)

    # Dispatch to instance operations

    def create(cls: type[Model], attrs: Mapping[str, Any] | None = None, **options: Any) -> Any:
        """Build a record from attrs and save it.

        Returns:
            Projection of the new record, or False if validation failed.
        """
        return cls(attrs).save(**options)

    def update(
        cls: type[Model], record_id: Hashable, attrs: Mapping[str, Any], **options: Any
    ) -> Any:
        """Load attrs onto the record with record_id and save it."""
        return cls.find(record_id).update_attributes(attrs, **options)

    def destroy(cls: type[Model], record_id: Hashable, **options: Any) -> Model:
        """Destroy the record with record_id."""
        return cls.find(record_id).destroy(**options)

    def change(cls: type[Model], *args: Any) -> Any:
        """Bind a ``change`` callback, or trigger ``change`` with args."""
        if len(args) == 1 and callable(args[0]):
            return cls.bind(CHANGE, args[0])
        return cls.trigger(CHANGE, *args)

    # Serialization

    def from_json(cls: type[Model], values: RecordInput | None) -> Model | list[Model]:
        """Build unsaved records from JSON text, a mapping, or a sequence.

        Returns:
            One record for a single object, a list for a sequence.
        """
        if values is None:
            return []
        if isinstance(values, (str, bytes, bytearray)):
            values = json.loads(values)
        if isinstance(values, (Mapping, cls)):
            return cls._instantiate(values)
        return [cls._instantiate(value) for value in values]

    def _instantiate(cls: type[Model], value: Mapping[str, Any] | Model) -> Model:
        if isinstance(value, cls):
            return cls(value.attributes())
        return cls(value)

    def to_json(cls: type[Model]) -> str:
        """JSON text of every record's attributes, in store order."""
        return json.dumps([record.attributes() for record in cls.storage().values()])
