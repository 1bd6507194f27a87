"""sentry-bridge: report host application errors and query logs to Sentry."""

from sentry_bridge.constants import ClientEvents
from sentry_bridge.core.events import Event, EventManager
from sentry_bridge.core.sentry import Bridge, init_sentry
from sentry_bridge.features.capture import SentryClient, SentryErrorLogger
from sentry_bridge.features.query_log import QueryLogCollector, QueryLogHandler
from sentry_bridge.models import BridgeConfig, ErrorRecord, LoggedQuery

__version__ = "0.1.0"

__all__ = [
    "Bridge",
    "BridgeConfig",
    "ClientEvents",
    "ErrorRecord",
    "Event",
    "EventManager",
    "LoggedQuery",
    "QueryLogCollector",
    "QueryLogHandler",
    "SentryClient",
    "SentryErrorLogger",
    "init_sentry",
]
