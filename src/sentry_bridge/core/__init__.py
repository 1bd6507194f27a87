"""Core infrastructure for sentry-bridge."""

from sentry_bridge.core.config import (
    get_config_value,
    load_config,
    merge_config,
    read_config_file,
    validate_config_file,
)
from sentry_bridge.core.events import (
    Event,
    EventManager,
)
from sentry_bridge.core.exceptions import (
    CaptureError,
    ConfigurationError,
    SentryBridgeError,
)
from sentry_bridge.core.logging import (
    configure_logging,
    get_logger,
)

__all__ = [
    # Exceptions
    "SentryBridgeError",
    "ConfigurationError",
    "CaptureError",
    # Logging
    "configure_logging",
    "get_logger",
    # Config
    "get_config_value",
    "load_config",
    "merge_config",
    "read_config_file",
    "validate_config_file",
    # Events
    "Event",
    "EventManager",
]
