"""Storage backends."""

from corral.storage.allocator import ClientIdAllocator
from corral.storage.local import RecordStore
from corral.storage.protocol import Identified, RecordStorage

__all__ = [
    "ClientIdAllocator",
    "Identified",
    "RecordStorage",
    "RecordStore",
]
