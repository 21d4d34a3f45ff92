"""
Pytest fixtures for PostgreSQL integration tests.

Usage:
    TEST_POSTGRES_HOST=localhost pytest -m integration
"""

import os

import pytest
import pytest_asyncio

from formquota.config.settings import Settings
from formquota.config.database import create_postgres_pool
from formquota.repositories.schema import drop_schema, ensure_schema
from formquota.repositories.store import Store
from formquota.repositories.form_repository import FormRepository
from formquota.repositories.submission_repository import SubmissionRepository


def pytest_collection_modifyitems(config, items):
    if os.getenv("TEST_POSTGRES_HOST"):
        return
    skip = pytest.mark.skip(reason="TEST_POSTGRES_HOST not set")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def postgres_settings():
    """Test PostgreSQL configuration from environment or defaults."""
    return Settings(
        store_backend="postgres",
        postgres_host=os.getenv("TEST_POSTGRES_HOST", "localhost"),
        postgres_port=int(os.getenv("TEST_POSTGRES_PORT", "5432")),
        postgres_user=os.getenv("TEST_POSTGRES_USER", "formquota_user"),
        postgres_password=os.getenv("TEST_POSTGRES_PASSWORD", "formquota_pass"),
        postgres_db=os.getenv("TEST_POSTGRES_DB", "formquota_test"),
        postgres_pool_min_size=2,
        postgres_pool_max_size=20,
    )


@pytest_asyncio.fixture
async def pg_store(postgres_settings):
    """
    Per-test fresh database.

    Drops and recreates the tables before each test.
    """
    db_pool = await create_postgres_pool(postgres_settings)
    await drop_schema(db_pool)
    await ensure_schema(db_pool)
    store = Store(
        forms=FormRepository(db_pool),
        submissions=SubmissionRepository(db_pool, acquire_timeout=10.0),
        backend="postgres",
        db_pool=db_pool,
    )
    try:
        yield store
    finally:
        await store.close()
