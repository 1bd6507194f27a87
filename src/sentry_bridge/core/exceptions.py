"""Exception hierarchy for sentry-bridge."""

from typing import Optional


class SentryBridgeError(Exception):
    """Base class for all sentry-bridge errors."""
    pass


class ConfigurationError(SentryBridgeError):
    """Raised when a configuration file or mapping is invalid."""

    def __init__(self, config_path: Optional[str], message: str) -> None:
        self.config_path = config_path
        self.message = message
        if config_path:
            super().__init__(f"Invalid configuration at '{config_path}': {message}")
        else:
            super().__init__(f"Invalid configuration: {message}")


class CaptureError(SentryBridgeError):
    """Raised when an event cannot be built for capture."""
    pass
