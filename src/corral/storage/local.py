"""Local in-memory record store.

Dict-based, dual-indexed storage for the canonical records of one model type.

Structure:
    records[id] = canonical record
    crecords[cid] = canonical record (same object once the record has an id)

Usage:
    store = RecordStore()
    Item.configure("Item", "name", storage=store)
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Any

from corral.core.identity import DEFAULT_CLIENT_ID_PREFIX, has_identity, is_client_id
from corral.storage.allocator import ClientIdAllocator
from corral.storage.protocol import Identified

logger = logging.getLogger(__name__)


class RecordStore[R: Identified]:
    """Canonical records of one model type, reachable by id and by cid.

    Holds the only references to canonical records. Callers outside the model
    layer get projections, never these objects.

    Args:
        prefix: Prefix of client ids minted by this store.
    """

    def __init__(self, prefix: str = DEFAULT_CLIENT_ID_PREFIX):
        """Initialize an empty store.

        Args:
            prefix: Prefix of client ids minted by this store.
        """
        self.records: dict[Hashable, R] = {}
        self.crecords: dict[Hashable, R] = {}
        self._allocator = ClientIdAllocator(prefix=prefix)

    @property
    def client_id_prefix(self) -> str:
        return self._allocator.prefix

    def get(self, record_id: Hashable) -> R | None:
        return self.records.get(record_id)

    def get_cid(self, cid: Hashable) -> R | None:
        return self.crecords.get(cid)

    def locate(self, record: Identified) -> R | None:
        """Find the canonical record sharing record's identity.

        Args:
            record: Record or projection to look up.

        Returns:
            Canonical record stored under record.id, else under record.cid,
            else None.
        """
        if has_identity(record.id):
            canonical = self.records.get(record.id)
            if canonical is not None:
                return canonical
        return self.crecords.get(record.cid)

    def has_id(self, record_id: Hashable) -> bool:
        return record_id in self.records

    def contains(self, key: Hashable) -> bool:
        return key in self.records or key in self.crecords

    def is_client_id(self, key: Any) -> bool:
        return is_client_id(key, self.client_id_prefix)

    def insert(self, record: R) -> None:
        """Store record under its id and its cid.

        A different record previously stored under the same id loses its cid
        entry too, so no stale record stays reachable.

        Args:
            record: Canonical record with an id set.
        """
        previous = self.records.get(record.id)
        if previous is not None and previous is not record:
            if self.crecords.get(previous.cid) is previous:
                del self.crecords[previous.cid]
        self.records[record.id] = record
        self.crecords[record.cid] = record
        logger.debug("stored record id=%r cid=%r", record.id, record.cid)

    def remove(self, record: R) -> bool:
        """Drop record from both maps.

        Args:
            record: Canonical record to drop.

        Returns:
            True if record was reachable from either map.
        """
        removed = False
        if self.records.get(record.id) is record:
            del self.records[record.id]
            removed = True
        if self.crecords.get(record.cid) is record:
            del self.crecords[record.cid]
            removed = True
        if removed:
            logger.debug("removed record id=%r cid=%r", record.id, record.cid)
        return removed

    def rekey(self, old_id: Hashable, new_id: Hashable) -> None:
        """Move the record stored under old_id to new_id.

        The canonical record's own ``id`` field is left for the caller to
        update (``Model.change_id`` does so through ``save``).

        Args:
            old_id: Current persisted id.
            new_id: Replacement persisted id.

        Raises:
            KeyError: If nothing is stored under old_id.
            ValueError: If another record already uses new_id.
        """
        if old_id == new_id:
            return
        if new_id in self.records:
            raise ValueError(f"Cannot rekey {old_id!r}: id {new_id!r} is already in use")
        self.records[new_id] = self.records.pop(old_id)

    def clear(self) -> None:
        self.records = {}
        self.crecords = {}

    def values(self) -> list[R]:
        return list(self.records.values())

    def mint_client_id(self, prefix: str | None = None) -> str:
        """Mint a client id not currently used as an id or cid in this store."""
        return self._allocator.allocate(self.contains, prefix=prefix)

    def __len__(self) -> int:
        return len(self.records)

    def __repr__(self) -> str:
        return f"<RecordStore records={len(self.records)} crecords={len(self.crecords)}>"
