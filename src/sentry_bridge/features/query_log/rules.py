"""Rules that recognise schema reflection queries.

ORMs and query builders describe tables before they use them. Those
statements say nothing about the application and only crowd out the
queries that matter in an error report.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class MatchKind(str, Enum):
    """How a rule's needle is compared to the query text."""

    PREFIX = "prefix"
    CONTAINS = "contains"


@dataclass(frozen=True)
class SchemaQueryRule:
    """One case-insensitive match against the query text.

    Attributes:
        name: Short identifier, e.g. the database the rule targets
        kind: Prefix or substring match
        needle: Text to look for
    """
    name: str
    kind: MatchKind
    needle: str

    def matches(self, sql: str) -> bool:
        text = sql.lstrip().lower()
        needle = self.needle.lower()
        if self.kind is MatchKind.PREFIX:
            return text.startswith(needle)
        return needle in text


# Evaluated in order; the first match wins
DEFAULT_SCHEMA_RULES: Sequence[SchemaQueryRule] = (
    # MySQL
    SchemaQueryRule("mysql", MatchKind.PREFIX, "SHOW TABLES FROM"),
    SchemaQueryRule("mysql", MatchKind.PREFIX, "SHOW FULL COLUMNS FROM"),
    SchemaQueryRule("mysql", MatchKind.PREFIX, "SHOW INDEXES FROM"),
    SchemaQueryRule("mysql", MatchKind.PREFIX, "SHOW CREATE TABLE"),
    # Postgres, MySQL and SQL Server catalogs
    SchemaQueryRule("information_schema", MatchKind.CONTAINS, "information_schema"),
    # SQL Server
    SchemaQueryRule("sqlserver", MatchKind.CONTAINS, "sys.tables"),
    SchemaQueryRule("sqlserver", MatchKind.CONTAINS, "sys.[tables]"),
    SchemaQueryRule("sqlserver", MatchKind.CONTAINS, "sys.foreign_keys"),
    # SQLite
    SchemaQueryRule("sqlite", MatchKind.PREFIX, "PRAGMA"),
)


def is_schema_query(sql: str, rules: Sequence[SchemaQueryRule] = DEFAULT_SCHEMA_RULES) -> bool:
    """Return True if ``sql`` matches any of ``rules``.

    Args:
        sql: Query text
        rules: Ordered rules to evaluate

    Returns:
        True for schema reflection, False for application queries
    """
    return any(rule.matches(sql) for rule in rules)
