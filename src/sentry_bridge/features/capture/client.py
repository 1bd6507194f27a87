"""Sentry client wrapper that runs captures through lifecycle events."""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import sentry_sdk
from sentry_sdk.utils import event_from_exception

from sentry_bridge.constants import ClientEvents
from sentry_bridge.core.config import get_config_value, merge_config
from sentry_bridge.core.events import Event, EventManager
from sentry_bridge.core.exceptions import CaptureError
from sentry_bridge.core.logging import get_logger
from sentry_bridge.features.query_log.collector import QueryLogCollector
from sentry_bridge.models.config import BridgeConfig
from sentry_bridge.models.error import ErrorRecord

# Request attributes copied into the Sentry request interface
_REQUEST_FIELDS = ("url", "method", "headers", "query_string", "data", "cookies", "env")


def request_to_dict(request: Any) -> Dict[str, Any]:
    """Extract the Sentry request interface from a mapping or request object.

    Works with plain dicts and with framework request objects exposing
    ``url``/``method``/``headers`` attributes.
    """
    if request is None:
        return {}
    rv: Dict[str, Any] = {}
    for name in _REQUEST_FIELDS:
        if isinstance(request, Mapping):
            value = request.get(name)
        else:
            value = getattr(request, name, None)
        if value is None or callable(value):
            continue
        if name in ("headers", "cookies", "env"):
            value = dict(value)
        elif name == "url":
            value = str(value)
        rv[name] = value
    return rv


class SentryClient:
    """Captures exceptions and runtime errors with a dedicated Sentry client.

    Every capture dispatches ``client.before_capture`` and
    ``client.after_capture``; construction dispatches ``client.after_setup``.
    Listeners receive the client as the event subject and may change the
    capture scope or the extras before the event is built.
    """

    def __init__(
        self,
        config: Union[BridgeConfig, Mapping[str, Any], None] = None,
        events: Optional[EventManager] = None,
        query_loggers: Optional[Iterable[QueryLogCollector]] = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Resolved configuration, or user settings to merge over defaults
            events: Event manager for lifecycle events (process default if omitted)
            query_loggers: Collectors whose queries are attached as breadcrumbs
        """
        if config is None:
            config = BridgeConfig()
        elif not isinstance(config, BridgeConfig):
            config = merge_config(config)
        self.config: BridgeConfig = config
        self.events = events if events is not None else EventManager.instance()
        self.query_loggers: List[QueryLogCollector] = list(query_loggers or [])
        self.logger = get_logger("sentry_client")
        self.setup_client()

    def setup_client(self) -> None:
        """Build the SDK client and its scope, then announce the setup."""
        options = self.config.sdk_options()
        self._client = sentry_sdk.Client(**options)
        self._scope = sentry_sdk.Scope(client=self._client)

        self.logger.info(
            "sentry_client_setup",
            dsn_configured=bool(options["dsn"]),
            environment=options.get("environment"),
            query_logging=self.config.enable_query_logging,
        )
        self.events.dispatch(Event(ClientEvents.AFTER_SETUP, self, {"config": self.config}))

    def get_client(self) -> Any:
        return self._client

    def get_scope(self) -> sentry_sdk.Scope:
        return self._scope

    def bind_client(self, client: Any) -> None:
        """Replace the SDK client, e.g. with a test double."""
        self._client = client
        self._scope.set_client(client)

    def get_config(self, key: str, default: Any = None) -> Any:
        return get_config_value(self.config, key, default)

    def add_query_logger(self, collector: QueryLogCollector) -> None:
        self.query_loggers.append(collector)

    def capture_exception(
        self,
        exception: BaseException,
        request: Any = None,
        extras: Optional[Mapping[str, Any]] = None,
    ) -> Optional[str]:
        """Capture an exception.

        Args:
            exception: The exception to report
            request: Optional request (mapping or request object) being served
            extras: Additional data attached to the event

        Returns:
            The event id, or None if the SDK dropped the event
        """
        scope = self._scope.fork()
        before = self._dispatch(ClientEvents.BEFORE_CAPTURE, {
            "exception": exception,
            "request": request,
            "extras": dict(extras or {}),
            "scope": scope,
        })

        event, hint = event_from_exception(exception, client_options=self._client_options())
        event_id = self._send(event, hint, scope, before.get_data("request"), before.get_data("extras"))

        self.logger.info("capture_exception", exception_type=type(exception).__name__, event_id=event_id)
        self._dispatch(ClientEvents.AFTER_CAPTURE, {
            "exception": exception,
            "request": request,
            "last_event_id": event_id,
            "event_id": event.get("event_id"),
        })
        return event_id

    def capture_error(
        self,
        error: ErrorRecord,
        request: Any = None,
        extras: Optional[Mapping[str, Any]] = None,
    ) -> Optional[str]:
        """Capture a runtime error that has no exception object.

        Args:
            error: The error to report
            request: Optional request (mapping or request object) being served
            extras: Additional data attached to the event

        Returns:
            The event id, or None if the SDK dropped the event

        Raises:
            CaptureError: If ``error`` is not an ErrorRecord
        """
        if not isinstance(error, ErrorRecord):
            raise CaptureError(f"Expected an ErrorRecord, got {type(error).__name__}")

        scope = self._scope.fork()
        before = self._dispatch(ClientEvents.BEFORE_CAPTURE, {
            "error": error,
            "request": request,
            "extras": dict(extras or {}),
            "scope": scope,
        })

        event: Dict[str, Any] = {
            "level": error.level,
            "message": error.message,
            "contexts": {
                "error": {
                    "code": error.code,
                    "label": error.label,
                    "file": error.file,
                    "line": error.line,
                },
            },
        }
        if error.trace or self.config.attach_stacktrace:
            stacktrace = error.to_stacktrace()
            if stacktrace["frames"]:
                event["stacktrace"] = stacktrace
        hint = {"error": error}

        event_id = self._send(event, hint, scope, before.get_data("request"), before.get_data("extras"))

        self.logger.info("capture_error", sentry_level=error.level, code=str(error.code), event_id=event_id)
        self._dispatch(ClientEvents.AFTER_CAPTURE, {
            "error": error,
            "request": request,
            "last_event_id": event_id,
            "event_id": event.get("event_id"),
        })
        return event_id

    def flush(self, timeout: Optional[float] = None) -> None:
        """Wait for queued events to be sent."""
        self._client.flush(timeout=timeout)

    def query_breadcrumbs(self) -> List[Dict[str, Any]]:
        """Breadcrumbs for every query held by the registered collectors."""
        breadcrumbs: List[Dict[str, Any]] = []
        for collector in self.query_loggers:
            breadcrumbs.extend(collector.to_breadcrumbs())
        return breadcrumbs

    def _send(
        self,
        event: Dict[str, Any],
        hint: Dict[str, Any],
        scope: sentry_sdk.Scope,
        request: Any,
        extras: Optional[Mapping[str, Any]],
    ) -> Optional[str]:
        for key, value in (extras or {}).items():
            scope.set_extra(key, value)

        request_data = request_to_dict(request)
        if request_data:
            event["request"] = request_data

        if self.config.enable_query_logging:
            breadcrumbs = self.query_breadcrumbs()
            if breadcrumbs:
                event["breadcrumbs"] = {"values": breadcrumbs}

        return self._client.capture_event(event, hint=hint, scope=scope)

    def _dispatch(self, name: str, data: Dict[str, Any]) -> Event:
        return self.events.dispatch(Event(name, self, data))

    def _client_options(self) -> Optional[Dict[str, Any]]:
        # Test doubles don't carry real SDK options
        options = getattr(self._client, "options", None)
        return options if isinstance(options, dict) else None
