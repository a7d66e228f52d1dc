"""
Configuration management for the CirrusDB client.

Handles loading and validation of configuration files.
"""

from cirrusdb.config.settings import (
    CirrusConfig,
    ClientSettings,
    LoggingSettings,
    get_default_config,
    get_default_config_path,
    load_config,
    validate_config,
    validate_settings,
)

__all__ = [
    "CirrusConfig",
    "ClientSettings",
    "LoggingSettings",
    "get_default_config",
    "get_default_config_path",
    "load_config",
    "validate_config",
    "validate_settings",
]
