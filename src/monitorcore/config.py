"""
Centralized configuration for monitorcore.

Uses Pydantic BaseSettings for environment variable integration
and validation. All configurable values should be defined here.

Configuration sources (in order of precedence):
1. Explicit constructor arguments
2. Environment variables (MONITORCORE_*)
3. .env file
4. Default values

The generators never read configuration themselves; callers pass the
relevant values in (see ``MonitorCoreConfig.alertmanager_defaults``).

Example:
    from monitorcore.config import get_config

    config = get_config()
    statefulset = make_stateful_set(am, defaults=config.alertmanager_defaults())
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from monitorcore.generators.alertmanager import (
    DEFAULT_BASE_IMAGE,
    DEFAULT_CONFIG_RELOADER_IMAGE,
    DEFAULT_VERSION,
    AlertmanagerDefaults,
)


class MonitorCoreConfig(BaseSettings):
    """
    Central configuration for monitorcore.

    All settings can be overridden via environment variables
    prefixed with MONITORCORE_.

    Example:
        export MONITORCORE_ALERTMANAGER_VERSION=v0.6.0
        export MONITORCORE_LOG_LEVEL=debug
    """

    model_config = SettingsConfigDict(
        env_prefix="MONITORCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    service_name: str = Field(
        default="monitorcore",
        description="Service name for log attribution",
    )

    # Alertmanager image defaults
    alertmanager_base_image: str = Field(
        default=DEFAULT_BASE_IMAGE,
        description="Alertmanager image used when the resource sets no baseImage",
    )
    alertmanager_version: str = Field(
        default=DEFAULT_VERSION,
        description="Alertmanager image tag used when the resource sets no version",
    )
    config_reloader_image: str = Field(
        default=DEFAULT_CONFIG_RELOADER_IMAGE,
        description="Sidecar image that reloads Alertmanager on config changes",
    )

    # Output
    output_dir: str = Field(
        default="./generated",
        description="Directory generated artifacts are written to",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="info",
        description="Logging level for monitorcore",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format (json for Loki, text for console)",
    )

    @field_validator("output_dir")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ and environment variables in paths."""
        return os.path.expanduser(os.path.expandvars(v))

    def get_output_path(self, namespace: Optional[str] = None) -> Path:
        """Get output directory path, optionally per namespace."""
        base = Path(self.output_dir)
        if namespace:
            return base / namespace
        return base

    def alertmanager_defaults(self) -> AlertmanagerDefaults:
        return AlertmanagerDefaults(
            base_image=self.alertmanager_base_image,
            version=self.alertmanager_version,
            config_reloader_image=self.config_reloader_image,
        )


# Global singleton
_config: Optional[MonitorCoreConfig] = None


def get_config(**overrides) -> MonitorCoreConfig:
    """
    Get the global configuration instance.

    Creates a singleton on first call. Subsequent calls return
    the same instance unless overrides are provided.

    Args:
        **overrides: Override any config values

    Returns:
        MonitorCoreConfig instance
    """
    global _config

    if overrides or _config is None:
        _config = MonitorCoreConfig(**overrides)

    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None


def get_log_level() -> str:
    """Get the configured log level."""
    return get_config().log_level
