"""
Store - the pair of repositories the services run against.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

from formquota.config.settings import Settings
from formquota.config.database import create_postgres_pool
from formquota.repositories.form_repository import FormRepository
from formquota.repositories.submission_repository import SubmissionRepository
from formquota.repositories.memory import (
    InMemoryDatabase,
    InMemoryFormRepository,
    InMemorySubmissionRepository,
)
from formquota.repositories.schema import ensure_schema

logger = logging.getLogger(__name__)


@dataclass
class Store:
    """Form and submission repositories sharing one backend"""
    forms: Any
    submissions: Any
    backend: str
    db_pool: Optional[Any] = None  # asyncpg.Pool for the postgres backend

    @classmethod
    def in_memory(cls, db: Optional[InMemoryDatabase] = None) -> 'Store':
        db = db or InMemoryDatabase()
        return cls(
            forms=InMemoryFormRepository(db),
            submissions=InMemorySubmissionRepository(db),
            backend="memory",
        )

    async def close(self) -> None:
        if self.db_pool is not None:
            await self.db_pool.close()
            self.db_pool = None
            logger.info("Closed PostgreSQL pool")


async def open_store(settings: Settings) -> Store:
    """
    Open the backend named by settings.store_backend.

    For postgres this creates the connection pool and, when
    auto_create_schema is set, the tables.
    """
    if settings.store_backend == "memory":
        logger.info("Using in-memory store")
        return Store.in_memory()

    db_pool = await create_postgres_pool(settings)
    if settings.auto_create_schema:
        await ensure_schema(db_pool)

    logger.info(f"Connected to PostgreSQL at {settings.postgres_host}:{settings.postgres_port}/{settings.postgres_db}")
    return Store(
        forms=FormRepository(db_pool),
        submissions=SubmissionRepository(db_pool, acquire_timeout=settings.pool_acquire_timeout_seconds),
        backend="postgres",
        db_pool=db_pool,
    )
