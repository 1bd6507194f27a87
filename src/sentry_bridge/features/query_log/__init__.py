"""Query log feature - collects executed queries for error reports."""

from sentry_bridge.features.query_log.collector import QueryLogCollector
from sentry_bridge.features.query_log.handler import QueryLogHandler
from sentry_bridge.features.query_log.rules import (
    DEFAULT_SCHEMA_RULES,
    MatchKind,
    SchemaQueryRule,
    is_schema_query,
)

__all__ = [
    "QueryLogCollector",
    "QueryLogHandler",
    "DEFAULT_SCHEMA_RULES",
    "MatchKind",
    "SchemaQueryRule",
    "is_schema_query",
]
