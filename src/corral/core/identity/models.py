"""Record identity helpers.

Usage:
    is_client_id("c-12")        # True
    has_identity(record.id)      # False for None and ""
"""

from __future__ import annotations

from typing import Any

DEFAULT_CLIENT_ID_PREFIX = "c-"


def has_identity(value: Any) -> bool:
    """Check whether an ``id``/``cid`` value counts as set.

    Args:
        value: Identity value read from a record.

    Returns:
        False for None and the empty string, True otherwise.
    """
    return value is not None and value != ""


def is_client_id(value: Any, prefix: str = DEFAULT_CLIENT_ID_PREFIX) -> bool:
    """Check whether a lookup key has the shape of a client id.

    Args:
        value: Key passed to a finder.
        prefix: Client id prefix of the store being searched.

    Returns:
        True if value is a string starting with prefix.
    """
    return isinstance(value, str) and value.startswith(prefix)
