"""Tests for schema reflection query rules"""

import pytest

from sentry_bridge.features.query_log.rules import (
    DEFAULT_SCHEMA_RULES,
    MatchKind,
    SchemaQueryRule,
    is_schema_query,
)


class TestSchemaQueryRule:
    """Test single rule matching"""

    def test_prefix_match_is_case_insensitive(self):
        rule = SchemaQueryRule("sqlite", MatchKind.PREFIX, "PRAGMA")
        assert rule.matches("pragma table_info(posts)")
        assert rule.matches("  PRAGMA foreign_keys")

    def test_prefix_does_not_match_inside_query(self):
        rule = SchemaQueryRule("sqlite", MatchKind.PREFIX, "PRAGMA")
        assert not rule.matches("SELECT 'PRAGMA' AS word")

    def test_contains_match(self):
        rule = SchemaQueryRule("sqlserver", MatchKind.CONTAINS, "sys.foreign_keys")
        assert rule.matches("SELECT [name] FROM SYS.FOREIGN_KEYS")
        assert not rule.matches("SELECT * FROM foreign_keys")


class TestIsSchemaQuery:
    """Test the default rule set"""

    @pytest.mark.parametrize("sql", [
        "SHOW TABLES FROM database",
        "show full columns from database.articles",
        "SHOW INDEXES FROM articles",
        "SELECT * FROM information_schema",
        "SELECT table_name FROM Information_Schema.columns",
        "SELECT I.[name] FROM sys.[tables]",
        "SELECT name FROM sys.tables",
        "SELECT [name] FROM sys.foreign_keys",
        "SELECT [name] FROM INFORMATION_SCHEMA.TABLES",
        "PRAGMA index_info()",
    ])
    def test_reflection_queries_match(self, sql):
        assert is_schema_query(sql)

    @pytest.mark.parametrize("sql", [
        "SELECT * FROM posts",
        "INSERT INTO posts (title) VALUES ('show tables from')",
        "UPDATE articles SET body = 'x' WHERE id = 1",
        "SHOW VARIABLES",
        "",
    ])
    def test_application_queries_do_not_match(self, sql):
        assert not is_schema_query(sql)

    def test_empty_rule_list_matches_nothing(self):
        assert not is_schema_query("PRAGMA index_info()", rules=[])

    def test_rules_are_extensible(self):
        """Test hosts can append rules to the defaults"""
        rules = list(DEFAULT_SCHEMA_RULES) + [SchemaQueryRule("postgres", MatchKind.CONTAINS, "pg_catalog")]

        assert is_schema_query("SELECT * FROM pg_catalog.pg_tables", rules)
        assert not is_schema_query("SELECT * FROM pg_catalog.pg_tables")
