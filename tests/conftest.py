"""
Pytest configuration and shared fixtures.

Most tests run against the in-memory store; PostgreSQL tests live in
tests/integration and need TEST_POSTGRES_HOST.
"""

import pytest

from formquota.repositories.memory import InMemoryDatabase
from formquota.repositories.store import Store
from formquota.services.aggregator import Aggregator
from formquota.services.allocator import Allocator


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring PostgreSQL"
    )


@pytest.fixture
def db():
    return InMemoryDatabase()


@pytest.fixture
def store(db):
    return Store.in_memory(db)


@pytest.fixture
def allocator(store):
    return Allocator(store.submissions, lock_timeout=5.0)


@pytest.fixture
def aggregator(store):
    return Aggregator(store.forms, store.submissions)

