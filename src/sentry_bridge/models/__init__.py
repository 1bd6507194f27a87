"""Data models for sentry-bridge."""

from sentry_bridge.models.config import BridgeConfig
from sentry_bridge.models.error import ErrorRecord
from sentry_bridge.models.query import LoggedQuery

__all__ = [
    "BridgeConfig",
    "ErrorRecord",
    "LoggedQuery",
]
