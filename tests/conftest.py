"""
Pytest configuration and fixtures for formrules tests

This module provides shared fixtures for unit and integration tests.
"""
import pytest
from hypothesis import HealthCheck, settings

from formrules.config import set_config
from formrules.core.exceptions import LookupUnavailableError
from formrules.core.lookup import ExistenceLookup, InMemoryLookup


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that exercise a single component"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that run forms end to end (YAML, sessions, CLI)"
    )


# The autouse config reset is function scoped; it holds no per-example state
settings.register_profile("formrules", suppress_health_check=[HealthCheck.function_scoped_fixture])
settings.load_profile("formrules")


# =======================
# CONFIGURATION FIXTURES
# =======================

@pytest.fixture(autouse=True)
def reset_engine_config(monkeypatch):
    """
    Isolate tests from FORMRULES_* variables in the calling environment

    The process-wide config is reloaded from the cleaned environment on
    first use and dropped again after each test.
    """
    for name in (
        "FORMRULES_BAIL",
        "FORMRULES_LOG_LEVEL",
        "FORMRULES_LOG_FORMAT",
        "FORMRULES_METRICS_ENABLED",
        "FORMRULES_LOOKUP_CACHE",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    set_config(None)
    yield
    set_config(None)


# =======================
# LOOKUP FIXTURES
# =======================

class RecordingLookup(ExistenceLookup):
    """In-memory lookup that records every query it answers"""

    def __init__(self, inner: ExistenceLookup):
        self.inner = inner
        self.calls: list[tuple[str, str, str]] = []

    def exists(self, table: str, column: str, value: str) -> bool:
        self.calls.append((table, column, value))
        return self.inner.exists(table, column, value)


class UnavailableLookup(ExistenceLookup):
    """Lookup whose backing store is always down"""

    def __init__(self):
        self.calls = 0

    def exists(self, table: str, column: str, value: str) -> bool:
        self.calls += 1
        raise LookupUnavailableError(table, column, "connection refused")


@pytest.fixture
def lookup() -> InMemoryLookup:
    """
    Lookup with a few statuses and users

    Returns:
        InMemoryLookup with "statuses" (ids 1-3) and "users" (ids 1, 2)
    """
    return InMemoryLookup({
        "statuses": [
            {"id": 1, "name": "open"},
            {"id": 2, "name": "in_progress"},
            {"id": 3, "name": "done"},
        ],
        "users": [
            {"id": 1, "email": "ada@example.com"},
            {"id": 2, "email": "grace@example.com"},
        ],
    })


@pytest.fixture
def recording_lookup(lookup) -> RecordingLookup:
    """Wrap the default lookup and record its queries"""
    return RecordingLookup(lookup)


@pytest.fixture
def unavailable_lookup() -> UnavailableLookup:
    """Lookup that always raises LookupUnavailableError"""
    return UnavailableLookup()


# =======================
# FILE FIXTURES
# =======================

FORMS_YAML = """
forms:
  create_task:
    bail: true
    rules:
      title: required|max:20
      status_id: required|exists:statuses,id
      priority:
        - integer
        - between:1,5
    messages:
      status_id.exists: That status does not exist
    attributes:
      status_id: status

  register_user:
    rules:
      name: required|min:2
      email: required|email
      role: required|in:admin,editor,viewer
"""


@pytest.fixture
def forms_file(tmp_path):
    """
    Write a forms YAML file to a temporary directory

    Returns:
        Path to the forms file
    """
    path = tmp_path / "forms.yaml"
    path.write_text(FORMS_YAML)
    return path
