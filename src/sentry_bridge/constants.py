"""Shared constants across the sentry-bridge codebase.

This module centralizes defaults and well-known names so the client,
the query log collector and the configuration layer agree on them.
"""


class SentryDefaults:
    """Defaults applied to the Sentry SDK client options."""

    ENVIRONMENT = "production"
    SAMPLE_RATE = 1.0
    TRACES_SAMPLE_RATE = 0.0
    MAX_BREADCRUMBS = 50
    ATTACH_STACKTRACE = True
    SEND_DEFAULT_PII = False


class QueryLogDefaults:
    """Query log collector defaults."""

    # Schema reflection queries are dropped unless a host opts back in
    IGNORE_SCHEMA_QUERIES = True
    CONTEXT_KEY = "query"  # Key under which hosts pass the LoggedQuery
    BREADCRUMB_CATEGORY = "sql.query"
    BREADCRUMB_TYPE = "query"
    MAX_QUERY_BREADCRUMBS = 100


class LoggingDefaults:
    """Logging configuration defaults."""

    DEFAULT_LEVEL = "INFO"
    LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ClientEvents:
    """Lifecycle event names dispatched by the Sentry client."""

    AFTER_SETUP = "client.after_setup"
    BEFORE_CAPTURE = "client.before_capture"
    AFTER_CAPTURE = "client.after_capture"


# Error labels mapped to Sentry event levels
ERROR_LEVELS = {
    "emergency": "fatal",
    "alert": "fatal",
    "critical": "fatal",
    "fatal": "fatal",
    "error": "error",
    "warning": "warning",
    "notice": "info",
    "strict": "info",
    "deprecated": "info",
    "info": "info",
    "debug": "debug",
}

# Environment variables read by the configuration layer
CONFIG_ENV_VAR = "SENTRY_BRIDGE_CONFIG"
ENV_OVERRIDES = {
    "SENTRY_DSN": "dsn",
    "SENTRY_ENVIRONMENT": "environment",
    "SENTRY_RELEASE": "release",
    "SENTRY_SERVER_NAME": "server_name",
    "LOG_LEVEL": "log_level",
    "LOG_FILE": "log_file",
}
