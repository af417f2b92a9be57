"""Record identity functionality: client id shape and identity presence."""

from corral.core.identity.models import DEFAULT_CLIENT_ID_PREFIX, has_identity, is_client_id

__all__ = [
    "DEFAULT_CLIENT_ID_PREFIX",
    "has_identity",
    "is_client_id",
]
