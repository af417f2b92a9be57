"""Storage protocol for a model type's canonical records.

Model types talk to their records only through this interface, so a different
backing store can be handed to ``Model.configure(..., storage=...)``.

Usage:
    store = RecordStore(prefix="c-")
    Item.configure("Item", "name", "price", storage=store)
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Identified(Protocol):
    """Anything carrying a persisted id and a client id."""

    id: Any
    cid: str


@runtime_checkable
class RecordStorage[R: Identified](Protocol):
    """Abstract canonical record store. Implementations hold the actual records."""

    @property
    def client_id_prefix(self) -> str:
        """Prefix of client ids minted by this store."""
        ...

    def get(self, record_id: Hashable) -> R | None:
        """Canonical record stored under a persisted id."""
        ...

    def get_cid(self, cid: Hashable) -> R | None:
        """Canonical record stored under a client id."""
        ...

    def locate(self, record: Identified) -> R | None:
        """Canonical record for the identity of record (id first, then cid)."""
        ...

    def has_id(self, record_id: Hashable) -> bool:
        """Check if a persisted id is a key of the store."""
        ...

    def contains(self, key: Hashable) -> bool:
        """Check if key is a persisted id or a client id in the store."""
        ...

    def is_client_id(self, key: Any) -> bool:
        """Check if key has the shape of a client id of this store."""
        ...

    def insert(self, record: R) -> None:
        """Store record under both its id and its cid."""
        ...

    def remove(self, record: R) -> bool:
        """Drop record from both maps. Returns True if it was stored."""
        ...

    def rekey(self, old_id: Hashable, new_id: Hashable) -> None:
        """Move the record stored under old_id to new_id."""
        ...

    def clear(self) -> None:
        """Drop every record."""
        ...

    def values(self) -> list[R]:
        """Canonical records in insertion order."""
        ...

    def mint_client_id(self, prefix: str | None = None) -> str:
        """Mint a client id that collides with nothing currently stored."""
        ...

    def __len__(self) -> int: ...
