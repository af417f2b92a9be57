"""Configuration module using Pydantic Settings.

Provides typed configuration for model stores with environment variable support.

Usage:
    from corral.config import StoreSettings, get_settings

    settings = get_settings()
    custom = StoreSettings(client_id_prefix="tmp-")
"""

from corral.config.settings import StoreSettings, get_settings, reset_settings

__all__ = [
    "StoreSettings",
    "get_settings",
    "reset_settings",
]
