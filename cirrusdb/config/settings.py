"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
CirrusDB client, a product of Garudex Labs

Configuration management for the CirrusDB client.

Loads YAML configuration from file with sensible defaults and validation.
Supports environment variable substitution using ${ENV_VAR} syntax.
"""

import os
import re
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional

import yaml

from cirrusdb.exceptions import InvalidConfigurationError
from cirrusdb.logging_config import get_logger

logger = get_logger(__name__)


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}

    Examples:
        "${CIRRUSDB_HOST}" -> value of CIRRUSDB_HOST env var
        "${CIRRUSDB_PORT:443}" -> value of CIRRUSDB_PORT or "443" if not set
    """
    if isinstance(value, str):
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


@dataclass
class ClientSettings:
    """
    Connection and credential settings owned by one client instance.

    ``user_token`` is the only field mutated after construction, and only by
    the authentication flow. Concurrent calls may observe the old or the new
    token while an authentication is completing; the last write wins.
    """

    hostname: str = "www.cirrusdb.com"
    port: int = 443
    path: str = "/api"
    version: str = "v1"

    email: str = ""
    password: str = ""
    user_token: str = ""

    connection_limit: Optional[int] = 10
    error_on_connection_limit: bool = False
    max_queue_length: Optional[int] = None

    timeout: Optional[float] = None
    scheme: Optional[str] = None

    @property
    def resolved_scheme(self) -> str:
        """Explicit scheme, else ``https`` on port 443 and ``http`` elsewhere."""
        if self.scheme:
            return self.scheme
        return "https" if self.port == 443 else "http"

    @property
    def base_url(self) -> str:
        return f"{self.resolved_scheme}://{self.hostname}:{self.port}"

    @property
    def effective_max_queue_length(self) -> Optional[int]:
        """
        Queue length the throttle enforces.

        Rejecting on a full connection limit without an explicit queue length
        means nothing waits: all slots busy is already "full".
        """
        if self.max_queue_length is not None:
            return self.max_queue_length
        if self.error_on_connection_limit:
            return 0
        return None

    def merged(self, overrides: Optional[Dict[str, Any]] = None) -> "ClientSettings":
        """
        Return a copy of these settings with ``overrides`` applied.

        Raises:
            InvalidConfigurationError: If an override names an unknown setting
        """
        if not overrides:
            return replace(self)

        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise InvalidConfigurationError(
                f"Unknown client setting(s): {', '.join(unknown)}"
            )
        return replace(self, **overrides)


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    json_format: bool = True


@dataclass
class CirrusConfig:
    """Top-level configuration loaded from YAML."""

    client: ClientSettings = field(default_factory=ClientSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.expanduser("~/.cirrusdb/config.yaml")


def get_default_config() -> CirrusConfig:
    """Get default configuration."""
    return CirrusConfig()


def load_config(config_path: Optional[str] = None) -> CirrusConfig:
    """
    Load configuration from YAML file with validation.

    If config file is not found, returns default configuration.
    If config file is malformed or invalid, raises InvalidConfigurationError.

    Args:
        config_path: Path to configuration file. If None, uses default path.

    Returns:
        CirrusConfig: Loaded and validated configuration

    Raises:
        InvalidConfigurationError: If configuration is invalid or malformed
    """
    if config_path is None:
        config_path = get_default_config_path()

    config_path = os.path.expanduser(str(config_path))

    if not os.path.exists(config_path):
        logger.info(f"Configuration file not found at {config_path}, using defaults")
        return get_default_config()

    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
        logger.debug(f"Loaded configuration from {config_path}")
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{config_path}': {e}"
        ) from e
    except OSError as e:
        logger.error(f"Failed to read configuration file '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Failed to read configuration file '{config_path}': {e}"
        ) from e

    if config_data is None:
        logger.info(f"Configuration file {config_path} is empty, using defaults")
        return get_default_config()

    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Configuration file '{config_path}' must contain a mapping"
        )

    config_data = _expand_env_vars(config_data)

    try:
        config = _build_config_from_dict(config_data)
        validate_config(config)
    except InvalidConfigurationError as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        ) from e

    logger.info(f"Successfully loaded and validated configuration from {config_path}")
    return config


def _coerce_optional_int(value: Any, name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}") from e


def _coerce_optional_float(value: Any, name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(f"{name} must be a number, got {value!r}") from e


def _coerce_bool(value: Any) -> bool:
    # Env expansion turns booleans into strings.
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _build_config_from_dict(config_data: Dict[str, Any]) -> CirrusConfig:
    """
    Build CirrusConfig from dictionary loaded from YAML.

    Merges user configuration with defaults.
    """
    defaults = get_default_config()

    client_data = config_data.get('client') or {}
    if not isinstance(client_data, dict):
        raise InvalidConfigurationError("'client' section must be a mapping")

    base = defaults.client
    client = ClientSettings(
        hostname=str(client_data.get('hostname', base.hostname)),
        port=_coerce_optional_int(client_data.get('port', base.port), "port"),
        path=str(client_data.get('path', base.path)),
        version=str(client_data.get('version', base.version)),
        email=str(client_data.get('email', base.email) or ""),
        password=str(client_data.get('password', base.password) or ""),
        user_token=str(client_data.get('user_token', base.user_token) or ""),
        connection_limit=_coerce_optional_int(
            client_data.get('connection_limit', base.connection_limit), "connection_limit"
        ),
        error_on_connection_limit=_coerce_bool(
            client_data.get('error_on_connection_limit', base.error_on_connection_limit)
        ),
        max_queue_length=_coerce_optional_int(
            client_data.get('max_queue_length', base.max_queue_length), "max_queue_length"
        ),
        timeout=_coerce_optional_float(client_data.get('timeout', base.timeout), "timeout"),
        scheme=client_data.get('scheme', base.scheme) or None,
    )

    logging_data = config_data.get('logging') or {}
    logging = LoggingSettings(
        level=str(logging_data.get('level', defaults.logging.level)),
        file=os.path.expanduser(str(logging_data.get('file', defaults.logging.file) or "")),
        json_format=_coerce_bool(logging_data.get('json_format', defaults.logging.json_format)),
    )

    return CirrusConfig(client=client, logging=logging)


def validate_settings(settings: ClientSettings) -> None:
    """
    Validate client settings.

    Raises:
        InvalidConfigurationError: If settings are invalid
    """
    if not settings.hostname:
        raise InvalidConfigurationError("hostname cannot be empty")
    if not isinstance(settings.port, int) or not 1 <= settings.port <= 65535:
        raise InvalidConfigurationError(
            f"port must be between 1 and 65535, got {settings.port!r}"
        )
    if settings.connection_limit is not None and not isinstance(settings.connection_limit, int):
        raise InvalidConfigurationError(
            f"connection_limit must be an integer or None, got {settings.connection_limit!r}"
        )
    if settings.max_queue_length is not None and (
        not isinstance(settings.max_queue_length, int) or settings.max_queue_length < 0
    ):
        raise InvalidConfigurationError(
            f"max_queue_length must be a non-negative integer or None, "
            f"got {settings.max_queue_length!r}"
        )
    if settings.timeout is not None and (
        not isinstance(settings.timeout, (int, float)) or settings.timeout <= 0
    ):
        raise InvalidConfigurationError(
            f"timeout must be a positive number or None, got {settings.timeout!r}"
        )
    if settings.scheme is not None and settings.scheme not in ("http", "https"):
        raise InvalidConfigurationError(
            f"scheme must be 'http' or 'https', got '{settings.scheme}'"
        )


def validate_config(config: CirrusConfig) -> None:
    """
    Validate configuration values.

    Raises:
        InvalidConfigurationError: If configuration is invalid
    """
    validate_settings(config.client)

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if config.logging.level.upper() not in valid_log_levels:
        raise InvalidConfigurationError(
            f"logging level must be one of {valid_log_levels}, "
            f"got '{config.logging.level}'"
        )
