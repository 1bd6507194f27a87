"""Adapter from the standard ``logging`` module to a query log collector."""
import logging
from typing import Any

from sentry_bridge.constants import QueryLogDefaults
from sentry_bridge.features.query_log.collector import QueryLogCollector


class QueryLogHandler(logging.Handler):
    """Forward query log records to a ``QueryLogCollector``.

    Hosts log queries with the LoggedQuery in ``extra``::

        logger.debug(str(query), extra={"query": query})
    """

    def __init__(self, collector: QueryLogCollector, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.collector = collector

    def emit(self, record: logging.LogRecord) -> None:
        query: Any = getattr(record, QueryLogDefaults.CONTEXT_KEY, None)
        if query is None:
            return
        try:
            self.collector.log(record.levelname, record.getMessage(), {QueryLogDefaults.CONTEXT_KEY: query})
        except Exception:
            self.handleError(record)
