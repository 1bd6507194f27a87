"""Bootstrap for wiring sentry-bridge into a host application."""
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Union

from sentry_bridge.core.config import load_config
from sentry_bridge.core.events import EventManager
from sentry_bridge.core.logging import configure_logging, get_logger
from sentry_bridge.features.capture.client import SentryClient
from sentry_bridge.features.capture.logger import SentryErrorLogger
from sentry_bridge.features.query_log.collector import QueryLogCollector
from sentry_bridge.models.config import BridgeConfig


@dataclass
class Bridge:
    """Objects a host needs after initialization."""

    config: BridgeConfig
    client: SentryClient
    error_logger: SentryErrorLogger
    query_loggers: List[QueryLogCollector] = field(default_factory=list)

    def start_request(self) -> List[QueryLogCollector]:
        """Swap in fresh query collectors for a new request.

        The previous collectors keep their queries; they are only detached
        from the client. Returns the new collectors.
        """
        previous = self.query_loggers
        self.query_loggers = [
            QueryLogCollector(collector.name, collector.ignore_schema, collector.rules)
            for collector in previous
        ]
        kept = [c for c in self.client.query_loggers if not any(c is p for p in previous)]
        self.client.query_loggers = kept + self.query_loggers
        return self.query_loggers


def init_sentry(
    config: Union[BridgeConfig, Mapping[str, Any], None] = None,
    config_path: Optional[str] = None,
    events: Optional[EventManager] = None,
    install_handlers: bool = False,
) -> Bridge:
    """Initialize logging, the Sentry client and the query log collector.

    Args:
        config: Resolved config, or settings overriding file and environment values
        config_path: YAML config file (SENTRY_BRIDGE_CONFIG env var when omitted)
        events: Event manager for lifecycle events
        install_handlers: Hook sys.excepthook and warnings.showwarning

    Returns:
        The wired Bridge
    """
    if not isinstance(config, BridgeConfig):
        config = load_config(config_path, overrides=config)

    configure_logging(log_level=config.log_level, log_file=config.log_file)

    query_loggers: List[QueryLogCollector] = []
    if config.enable_query_logging:
        query_loggers.append(QueryLogCollector("default", ignore_schema=not config.include_schema_queries))

    client = SentryClient(config, events=events, query_loggers=query_loggers)
    error_logger = SentryErrorLogger(client)
    if install_handlers:
        error_logger.install()

    logger = get_logger("sentry")
    logger.info(
        "sentry_initialized",
        environment=config.environment,
        query_logging=config.enable_query_logging,
        handlers_installed=install_handlers,
    )
    return Bridge(config=config, client=client, error_logger=error_logger, query_loggers=query_loggers)
