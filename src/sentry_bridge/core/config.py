"""Configuration management for sentry-bridge."""

import os
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from sentry_bridge.constants import CONFIG_ENV_VAR, ENV_OVERRIDES
from sentry_bridge.core.exceptions import ConfigurationError
from sentry_bridge.core.logging import get_logger
from sentry_bridge.models.config import BridgeConfig

# Top-level key a config file may nest its settings under
CONFIG_SECTION = "sentry"


def read_config_file(config_path: str) -> Dict[str, Any]:
    """Read a YAML config file into a plain mapping.

    Args:
        config_path: Path to the YAML file

    Returns:
        The settings mapping (the ``sentry:`` section if present)

    Raises:
        ConfigurationError: If the file is missing, unreadable or malformed
    """
    if not os.path.exists(config_path):
        raise ConfigurationError(config_path, "File does not exist")

    if not os.path.isfile(config_path):
        raise ConfigurationError(config_path, "Path is not a file")

    try:
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(config_path, f"YAML parsing failed: {e}") from e
    except OSError as e:
        raise ConfigurationError(config_path, f"Failed to read file: {e}") from e

    if config_data is None:
        raise ConfigurationError(config_path, "Config file is empty")

    if not isinstance(config_data, dict):
        raise ConfigurationError(config_path, "Config must be a YAML dictionary")

    section = config_data.get(CONFIG_SECTION, config_data)
    if not isinstance(section, dict):
        raise ConfigurationError(config_path, f"'{CONFIG_SECTION}' section must be a dictionary")
    return section


def validate_config_file(config_path: str) -> BridgeConfig:
    """Validate a YAML config file against the configuration model.

    Args:
        config_path: Path to the YAML file

    Returns:
        Validated BridgeConfig model

    Raises:
        ConfigurationError: If config file is invalid
    """
    return merge_config(read_config_file(config_path), config_path=config_path)


def merge_config(
    user_config: Mapping[str, Any],
    defaults: Optional[Mapping[str, Any]] = None,
    config_path: Optional[str] = None,
) -> BridgeConfig:
    """Merge user settings over defaults and validate the result.

    Keys the user leaves out keep their default value. Keys the user sets,
    including explicit ``None``/``False`` values, win. The ``options``
    pass-through mapping is merged key by key.

    Args:
        user_config: Settings supplied by the host application
        defaults: Base settings (model defaults when omitted)
        config_path: Source file, used in error messages only

    Raises:
        ConfigurationError: If the merged settings fail validation
    """
    merged: Dict[str, Any] = dict(defaults) if defaults is not None else {}
    for key, value in user_config.items():
        if key == "options" and isinstance(value, Mapping) and isinstance(merged.get("options"), Mapping):
            merged["options"] = {**merged["options"], **value}
        else:
            merged[key] = value

    try:
        return BridgeConfig(**merged)
    except ValidationError as e:
        raise ConfigurationError(config_path, f"Validation failed: {e}") from e
    except TypeError as e:
        raise ConfigurationError(config_path, f"Validation failed: {e}") from e


def _env_settings() -> Dict[str, Any]:
    """Collect settings from environment variables."""
    settings: Dict[str, Any] = {}
    for env_name, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            settings[key] = value
    return settings


def load_config(
    config_path: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> BridgeConfig:
    """Resolve the effective configuration.

    Precedence: overrides > environment variables > config file > defaults.
    The config file is ``config_path`` or, when omitted, the file named by
    the SENTRY_BRIDGE_CONFIG environment variable.

    Args:
        config_path: Optional path to a YAML config file
        overrides: Settings supplied in code by the host application

    Returns:
        Validated BridgeConfig

    Raises:
        ConfigurationError: If the file or the merged settings are invalid
    """
    logger = get_logger("config")
    path = config_path or os.environ.get(CONFIG_ENV_VAR) or None

    settings: Dict[str, Any] = {}
    if path:
        settings.update(read_config_file(path))
    settings.update(_env_settings())
    if overrides:
        settings.update(overrides)

    config = merge_config(settings, config_path=path)
    logger.debug(
        "config_loaded",
        config_path=path,
        dsn_configured=bool(config.sdk_options()["dsn"]),
        enable_query_logging=config.enable_query_logging,
    )
    return config


def get_config_value(config: BridgeConfig, key: str, default: Any = None) -> Any:
    """Look up a setting with a dotted key, e.g. ``options.dist``.

    Args:
        config: Configuration to read
        key: Dotted key path
        default: Value returned when the key is missing
    """
    value: Any = config.model_dump()
    for part in key.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return default
        value = value[part]
    return value
