"""Client id allocation service.

ClientIdAllocator is a stateful service that mints client ids for one model type.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from corral.core.identity import DEFAULT_CLIENT_ID_PREFIX

logger = logging.getLogger(__name__)


def _never_taken(candidate: str) -> bool:
    return False


class ClientIdAllocator:
    """Mints ``prefix + counter`` ids, skipping ids that are already in use.

    The counter only grows, so an id handed out once is never produced again
    by the same allocator.

    Args:
        prefix: Default prefix for minted ids.
        start: First counter value.
    """

    def __init__(self, prefix: str = DEFAULT_CLIENT_ID_PREFIX, start: int = 0):
        """Initialize the allocator.

        Args:
            prefix: Default prefix for minted ids.
            start: First counter value.
        """
        self._prefix = prefix
        self._next_index = start

    @property
    def prefix(self) -> str:
        """Default prefix used when allocate() is called without one."""
        return self._prefix

    @property
    def next_index(self) -> int:
        """Counter value the next candidate id will use."""
        return self._next_index

    def allocate(
        self,
        taken: Callable[[str], bool] = _never_taken,
        prefix: str | None = None,
    ) -> str:
        """Mint a new id that the taken predicate does not reject.

        Regenerates with the next counter value for as long as the candidate is
        reported as taken, so the result never collides with the store contents
        at the time of the call.

        Args:
            taken: Returns True if a candidate id is already in use.
            prefix: Overrides the default prefix for this id.

        Returns:
            Newly minted id.
        """
        prefix = self._prefix if prefix is None else prefix
        while True:
            candidate = f"{prefix}{self._next_index}"
            self._next_index += 1
            if not taken(candidate):
                return candidate
            logger.debug("client id %s already in use, regenerating", candidate)
