"""Configuration loading.

Configuration is read from a JSON file and then overridden by environment
variables. A missing file is not an error: every setting has a default.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from storage_placement.config.platform_dirs import get_config_location, get_logs_location
from storage_placement.config.schemas.app_schema import AppConfig
from storage_placement.domain.base.exceptions import ConfigurationError

CONFIG_FILE_ENV = "STORAGE_PLACEMENT_CONFIG_FILE"
CONFIG_FILE_NAME = "config.json"

# Environment variable -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "AZURE_SUBSCRIPTION_ID": ("azure", "subscription_id"),
    "STORAGE_PLACEMENT_OPERATION_TIMEOUT": ("azure", "operation_timeout_seconds"),
    "STORAGE_PLACEMENT_ENDPOINT_RESOLUTION": ("placement", "endpoint_resolution"),
    "STORAGE_PLACEMENT_DNS_TIMEOUT": ("placement", "dns_timeout_seconds"),
    "STORAGE_PLACEMENT_LOG_LEVEL": ("logging", "level"),
    "STORAGE_PLACEMENT_LOG_DESTINATION": ("logging", "destination"),
    "STORAGE_PLACEMENT_LOG_DIR": ("logging", "log_dir"),
}


def resolve_config_path(config_path: Optional[str] = None) -> Path:
    """Pick the config file: explicit path, then environment, then config dir."""
    if config_path:
        return Path(config_path)
    if env_path := os.environ.get(CONFIG_FILE_ENV):
        return Path(env_path)
    return get_config_location() / CONFIG_FILE_NAME


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in config file {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")
    return data


def apply_env_overrides(
    data: dict[str, Any], environ: Optional[dict[str, str]] = None
) -> dict[str, Any]:
    """Return a copy of data with environment overrides applied."""
    environ = os.environ if environ is None else environ
    merged = {section: dict(values) for section, values in data.items() if isinstance(values, dict)}
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            merged.setdefault(section, {})[key] = value
    return merged


def load_config(
    config_path: Optional[str] = None, environ: Optional[dict[str, str]] = None
) -> AppConfig:
    """
    Load application configuration.

    Args:
        config_path: Explicit config file path (must exist when given)
        environ: Environment mapping, defaults to os.environ

    Returns:
        Validated AppConfig

    Raises:
        ConfigurationError: If the file is unreadable, malformed or invalid
    """
    path = resolve_config_path(config_path)
    data: dict[str, Any] = {}
    if path.exists():
        data = _read_config_file(path)
    elif config_path:
        raise ConfigurationError(f"Config file not found: {path}")

    data = apply_env_overrides(data, environ)
    if "log_dir" not in data.get("logging", {}):
        data.setdefault("logging", {})["log_dir"] = str(get_logs_location())

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
