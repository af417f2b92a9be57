"""Model layer: records, their type-level store operations, record-scoped events.

Architecture Note:
    model/ is the stateful layer. Each configured Model subclass owns one
    store (see storage/) and one type-level event registry.
"""

from corral.model.events import Binding, RecordEvents
from corral.model.model import Model
from corral.model.operations import StoreOperations

__all__ = [
    "Binding",
    "Model",
    "RecordEvents",
    "StoreOperations",
]
