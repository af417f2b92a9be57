"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for the store.

Usage:
    from corral.config import StoreSettings, get_settings

    # Load from environment variables (CORRAL_*)
    settings = get_settings()

    # Or override with explicit values
    settings = StoreSettings(client_id_prefix="tmp-")
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import field_validator

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for the config module. "
        "Install with: pip install pydantic-settings"
    ) from e


class StoreSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for model stores and library logging.

    Attributes:
        client_id_prefix: Prefix of minted client ids; finders treat keys with
            this prefix as client ids.
        log_level: Level for the ``corral`` logger when configure_logging runs.
        structured_logs: Emit JSON lines instead of plain text.

    Environment Variables:
        CORRAL_CLIENT_ID_PREFIX
        CORRAL_LOG_LEVEL
        CORRAL_STRUCTURED_LOGS
    """

    model_config = SettingsConfigDict(
        env_prefix="CORRAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    client_id_prefix: str = "c-"
    log_level: str = "WARNING"
    structured_logs: bool = False

    @field_validator("client_id_prefix")
    @classmethod
    def _prefix_not_empty(cls, value: str) -> str:
        # An empty prefix would make every key look like a client id.
        if not value:
            raise ValueError("client_id_prefix must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> StoreSettings:
    """Settings loaded once from the environment."""
    return StoreSettings()


def reset_settings() -> None:
    """Forget the cached settings so the next get_settings() reloads them."""
    get_settings.cache_clear()
