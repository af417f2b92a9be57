"""Exception hierarchy for Corral.

Hard failures interrupt the call with one of these. Soft failures (validation)
are reported through the ``error`` event instead, see ``Model.save``.
"""

from __future__ import annotations


class CorralError(Exception):
    """Base class for all Corral errors."""


class UnknownRecordError(CorralError, LookupError):
    """Raised when no canonical record matches the requested identity."""


class MissingArgumentError(CorralError, TypeError):
    """Raised when capability composition is called without a capability object."""


class UnconfiguredModelError(CorralError):
    """Raised when a model type is used before ``configure()`` was called on it."""
