"""Tests for query and error data models"""

import dataclasses

import pytest

from sentry_bridge.models.error import ErrorRecord
from sentry_bridge.models.query import LoggedQuery


class TestLoggedQuery:
    """Test the logged query record"""

    def test_str(self, make_query):
        assert str(make_query()) == "duration=10 rows=5 SELECT * FROM posts"

    def test_frozen(self, make_query):
        query = make_query()
        with pytest.raises(dataclasses.FrozenInstanceError):
            query.took = 20  # type: ignore[misc]

    def test_hashable_with_params(self, make_query):
        query = make_query(params={"id": 1})

        assert hash(query) == hash(make_query(params={"id": 1}))
        assert len({query, make_query(params={"id": 1})}) == 1

    def test_params_still_compared(self, make_query):
        assert make_query(params={"id": 1}) != make_query(params={"id": 2})

    def test_breadcrumb_data_minimal(self, make_query):
        assert make_query().to_breadcrumb_data() == {"took": 10, "num_rows": 5}

    def test_breadcrumb_data_with_connection_and_params(self, make_query):
        query = make_query(connection="replica", params={"id": 1})

        assert query.to_breadcrumb_data() == {
            "took": 10,
            "num_rows": 5,
            "connection": "replica",
            "params": {"id": 1},
        }


class TestErrorRecord:
    """Test runtime error records"""

    @pytest.mark.parametrize("label,level", [
        ("fatal", "fatal"),
        ("critical", "fatal"),
        ("error", "error"),
        ("Warning", "warning"),
        ("notice", "info"),
        ("deprecated", "info"),
        ("debug", "debug"),
        ("something-else", "error"),
    ])
    def test_level(self, label, level):
        assert ErrorRecord(code=1, message="x", label=label).level == level

    def test_from_warning(self):
        error = ErrorRecord.from_warning(UserWarning("careful"), UserWarning, "/app/a.py", 12)

        assert error.code == "UserWarning"
        assert error.message == "careful"
        assert error.label == "warning"
        assert (error.file, error.line) == ("/app/a.py", 12)

    @pytest.mark.parametrize("category", [DeprecationWarning, PendingDeprecationWarning, FutureWarning])
    def test_from_deprecation_warning(self, category):
        assert ErrorRecord.from_warning("old", category, "/app/a.py", 1).label == "deprecated"

    def test_stacktrace_innermost_last(self):
        error = ErrorRecord(code=1, message="x", trace=[
            {"file": "/app/inner.py", "line": 3, "function": "inner"},
            {"file": "/app/outer.py", "line": 9},
        ])

        assert error.to_stacktrace() == {"frames": [
            {"filename": "/app/outer.py", "lineno": 9, "function": "<unknown>"},
            {"filename": "/app/inner.py", "lineno": 3, "function": "inner"},
        ]}

    def test_stacktrace_from_location(self):
        error = ErrorRecord(code=1, message="x", file="/app/a.py", line=4)

        assert error.to_stacktrace()["frames"] == [{"filename": "/app/a.py", "lineno": 4, "function": "<unknown>"}]

    def test_stacktrace_empty(self):
        assert ErrorRecord(code=1, message="x").to_stacktrace() == {"frames": []}

    def test_str(self):
        error = ErrorRecord(code=2, message="something wrong.", file="/app/test.py", line=123, label="warning")

        assert str(error) == "Warning (2): something wrong. in /app/test.py on line 123"
