"""Configuration model for sentry-bridge."""
import os
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sentry_bridge.constants import LoggingDefaults, SentryDefaults


class BridgeConfig(BaseModel):
    """Merged configuration for the Sentry client and the query log collector.

    Sentry SDK options live at the top level; anything the SDK accepts but
    this model does not name goes into ``options`` and is passed through.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    # Sentry SDK options
    dsn: Union[str, bool, None] = None
    environment: str = SentryDefaults.ENVIRONMENT
    release: Optional[str] = None
    server_name: Optional[str] = None
    in_app_exclude: List[str] = Field(default_factory=list)
    prefixes: List[str] = Field(default_factory=lambda: [os.getcwd()])
    sample_rate: float = SentryDefaults.SAMPLE_RATE
    traces_sample_rate: float = SentryDefaults.TRACES_SAMPLE_RATE
    max_breadcrumbs: int = SentryDefaults.MAX_BREADCRUMBS
    attach_stacktrace: bool = SentryDefaults.ATTACH_STACKTRACE
    send_default_pii: bool = SentryDefaults.SEND_DEFAULT_PII
    before_send: Optional[Callable[..., Any]] = None
    options: Dict[str, Any] = Field(default_factory=dict)

    # Plugin options
    enable_query_logging: bool = False
    include_schema_queries: bool = False
    log_level: str = LoggingDefaults.DEFAULT_LEVEL
    log_file: Optional[str] = None

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LoggingDefaults.LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LoggingDefaults.LEVELS)}")
        return level

    @field_validator("sample_rate", "traces_sample_rate")
    @classmethod
    def _check_rate(cls, value: float) -> float:
        if not 0.0 <= value <= 1.0:
            raise ValueError("sample rates must be between 0.0 and 1.0")
        return value

    def sdk_options(self) -> Dict[str, Any]:
        """Keyword arguments for ``sentry_sdk.Client``.

        A falsy ``dsn`` (unset, empty or ``false``) disables the transport.
        """
        rv: Dict[str, Any] = {
            "dsn": self.dsn if isinstance(self.dsn, str) and self.dsn else None,
            "environment": self.environment,
            "in_app_exclude": list(self.in_app_exclude),
            "sample_rate": self.sample_rate,
            "traces_sample_rate": self.traces_sample_rate,
            "max_breadcrumbs": self.max_breadcrumbs,
            "attach_stacktrace": self.attach_stacktrace,
            "send_default_pii": self.send_default_pii,
        }
        if self.release is not None:
            rv["release"] = self.release
        if self.server_name is not None:
            rv["server_name"] = self.server_name
        if self.prefixes:
            rv["project_root"] = self.prefixes[0]
        if self.before_send is not None:
            rv["before_send"] = self.before_send
        rv.update(self.options)
        return rv
