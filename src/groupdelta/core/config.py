# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Core configuration - centralized config for the groupdelta package.

All environment-based configuration should flow through this module.
This provides a single source of truth and consistent defaults.

Usage:
    from groupdelta.core.config import get_config
    config = get_config()

    log_level = config.log_level
    validate = config.validate_snapshots
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CoreSettings(BaseSettings):
    """Core configuration settings for groupdelta.

    Settings can be configured via environment variables with the
    GROUPDELTA_ prefix, or through a local .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # LOGGING SETTINGS
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
        validation_alias="GROUPDELTA_LOG_LEVEL",
    )
    log_format: str = Field(
        default="",
        description="Log format: 'json', 'text', or '' (auto-detect)",
        validation_alias="GROUPDELTA_LOG_FORMAT",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (optional)",
        validation_alias="GROUPDELTA_LOG_FILE",
    )

    # ==========================================================================
    # RECONCILER SETTINGS
    # ==========================================================================

    validate_snapshots: bool = Field(
        default=True,
        description="Check both snapshots for duplicate identities before reconciling them.",
        validation_alias="GROUPDELTA_VALIDATE_SNAPSHOTS",
    )


# ==========================================================================
# GLOBAL CONFIG INSTANCE (lazy loaded)
# ==========================================================================

_config: CoreSettings | None = None


def get_config() -> CoreSettings:
    """Get the global configuration instance.

    Returns:
        The singleton CoreSettings instance.
    """
    global _config
    if _config is None:
        _config = CoreSettings()
    return _config


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing."""
    global _config
    _config = None
