"""Corral: observable in-memory record store with an event bus and capability composition.

Usage:
    from corral import Model, UnknownRecordError

    class Item(Model):
        pass

    Item.configure("Item", "name", "price")

    Item.bind("change", lambda record, kind, options: print(kind, record))
    pen = Item.create({"name": "Pen", "price": 1})

    found = Item.find(pen.id)
    found.price = 2          # local to this projection
    found.save()             # now stored

    Item.destroy(pen.id)
    Item.exists(pen.id)      # False
"""

import logging

__version__ = "0.1.0"

# Core primitives
from corral.core import (
    Capability,
    EventBus,
    Events,
    Module,
    Projection,
    Receivers,
    Surface,
    names,
)

# Configuration
from corral.config import StoreSettings, get_settings, reset_settings

# Errors
from corral.errors import (
    CorralError,
    MissingArgumentError,
    UnconfiguredModelError,
    UnknownRecordError,
)

# Model
from corral.model import Model, RecordEvents, StoreOperations

# Storage
from corral.storage import ClientIdAllocator, RecordStorage, RecordStore

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Core
    "Capability",
    "EventBus",
    "Events",
    "Module",
    "Projection",
    "Receivers",
    "Surface",
    "names",
    # Model
    "Model",
    "RecordEvents",
    "StoreOperations",
    # Storage
    "ClientIdAllocator",
    "RecordStorage",
    "RecordStore",
    # Config
    "StoreSettings",
    "get_settings",
    "reset_settings",
    # Errors
    "CorralError",
    "MissingArgumentError",
    "UnconfiguredModelError",
    "UnknownRecordError",
]
