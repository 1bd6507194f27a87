"""Shared pytest fixtures for the sentry-bridge test suite.

Every client built here runs offline: no DSN is configured, so the SDK
prepares events (running ``before_send``) but never sends them.
"""

import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sentry_bridge.constants import ENV_OVERRIDES, CONFIG_ENV_VAR  # noqa: E402
from sentry_bridge.core.events import EventManager  # noqa: E402
from sentry_bridge.models.config import BridgeConfig  # noqa: E402
from sentry_bridge.models.query import LoggedQuery  # noqa: E402


# ============================================================================
# Environment Isolation Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove configuration environment variables and the default event manager."""
    for name in list(ENV_OVERRIDES) + [CONFIG_ENV_VAR]:
        monkeypatch.delenv(name, raising=False)
    EventManager.reset_instance()
    yield
    EventManager.reset_instance()


# ============================================================================
# Client Fixtures
# ============================================================================

@pytest.fixture
def event_manager() -> EventManager:
    """Provide an event manager private to the test."""
    return EventManager()


@pytest.fixture
def captured_events() -> List[Dict[str, Any]]:
    """Events seen by the ``before_send`` hook of ``offline_config``."""
    return []


@pytest.fixture
def offline_config(captured_events) -> BridgeConfig:
    """Config without a DSN whose ``before_send`` records and drops events."""

    def before_send(event, hint):
        captured_events.append(event)
        return None

    return BridgeConfig(dsn=None, before_send=before_send)


# ============================================================================
# Factory Fixtures
# ============================================================================

@pytest.fixture
def make_query() -> Callable[..., LoggedQuery]:
    """Factory for LoggedQuery with the values used throughout the suite."""

    def _make(sql: str = "SELECT * FROM posts", took: int = 10, num_rows: int = 5, **kwargs: Any) -> LoggedQuery:
        return LoggedQuery(query=sql, took=took, num_rows=num_rows, **kwargs)

    return _make


@pytest.fixture
def config_file(tmp_path) -> Callable[[str], str]:
    """Write YAML text to a temporary config file and return its path."""

    def _write(content: str) -> str:
        path = tmp_path / "sentry.yml"
        path.write_text(content)
        return str(path)

    return _write
