"""Data models for logged database queries."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class LoggedQuery:
    """A single executed query as reported by the host's query logger.

    Attributes:
        query: The executed SQL statement text
        took: Execution time in milliseconds
        num_rows: Number of rows returned or affected
        params: Bound parameters, if the host reports them
        connection: Name of the connection that ran the query
    """
    query: str
    took: Union[int, float] = 0
    num_rows: int = 0
    # Left out of the hash so queries can be used in sets and as dict keys
    params: Dict[str, Any] = field(default_factory=dict, hash=False)
    connection: Optional[str] = None

    def __str__(self) -> str:
        return f"duration={self.took} rows={self.num_rows} {self.query}"

    def to_breadcrumb_data(self) -> Dict[str, Any]:
        """Metadata attached to the query's Sentry breadcrumb."""
        data: Dict[str, Any] = {
            "took": self.took,
            "num_rows": self.num_rows,
        }
        if self.connection:
            data["connection"] = self.connection
        if self.params:
            data["params"] = dict(self.params)
        return data
