"""Query log collector.

Collects the queries a request runs, with their total time and row count,
so they can be attached to an error report as breadcrumbs.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from sentry_bridge.constants import QueryLogDefaults
from sentry_bridge.features.query_log.rules import DEFAULT_SCHEMA_RULES, SchemaQueryRule, is_schema_query
from sentry_bridge.models.query import LoggedQuery


class QueryLogCollector:
    """Keeps the queries logged during one session and running totals.

    A collector belongs to one request (or one test); it is not safe to
    share between threads. Logging never raises: a call without a query
    in its context is ignored.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        ignore_schema: bool = QueryLogDefaults.IGNORE_SCHEMA_QUERIES,
        rules: Sequence[SchemaQueryRule] = DEFAULT_SCHEMA_RULES,
    ) -> None:
        """Initialize the collector.

        Args:
            name: Label for this collector, usually the connection name
            ignore_schema: Drop schema reflection queries
            rules: Rules that identify schema reflection queries
        """
        self.name = name
        self.ignore_schema = ignore_schema
        self.rules = tuple(rules)
        self._queries: List[LoggedQuery] = []
        self._logged_at: List[datetime] = []
        self._total_time: Union[int, float] = 0
        self._total_rows = 0

    def log(self, level: Any, message: str, context: Optional[Mapping[str, Any]] = None) -> None:
        """Record a logged query.

        Args:
            level: Log level from the host logger (not used for filtering)
            message: Formatted log message (not used for filtering)
            context: Must carry the LoggedQuery under the 'query' key
        """
        query = (context or {}).get(QueryLogDefaults.CONTEXT_KEY)
        if not isinstance(query, LoggedQuery):
            return

        if self.ignore_schema and is_schema_query(query.query, self.rules):
            return

        self._queries.append(query)
        self._logged_at.append(datetime.now(timezone.utc))
        self._total_time += query.took
        self._total_rows += query.num_rows

    def queries(self) -> Tuple[LoggedQuery, ...]:
        return tuple(self._queries)

    def total_time(self) -> Union[int, float]:
        return self._total_time

    def total_rows(self) -> int:
        return self._total_rows

    def to_breadcrumbs(self, limit: int = QueryLogDefaults.MAX_QUERY_BREADCRUMBS) -> List[Dict[str, Any]]:
        """Render the most recent ``limit`` queries as Sentry breadcrumbs."""
        breadcrumbs: List[Dict[str, Any]] = []
        if limit <= 0:
            return breadcrumbs
        for query, logged_at in zip(self._queries[-limit:], self._logged_at[-limit:]):
            data = query.to_breadcrumb_data()
            if self.name and "connection" not in data:
                data["connection"] = self.name
            breadcrumbs.append({
                "timestamp": logged_at,
                "type": QueryLogDefaults.BREADCRUMB_TYPE,
                "category": QueryLogDefaults.BREADCRUMB_CATEGORY,
                "level": "info",
                "message": query.query,
                "data": data,
            })
        return breadcrumbs
