"""
Database Configuration
======================

PostgreSQL connection configuration for the API process and scripts.
"""
import os
from typing import Optional
from dataclasses import dataclass

from .settings import Settings


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""
    host: str
    port: int
    user: str
    password: str
    database: str
    min_size: int = 2
    max_size: int = 10

    @classmethod
    def from_env(cls, min_size: int = 2, max_size: int = 10) -> 'PostgresConfig':
        """Create config from environment variables."""
        host = os.getenv('POSTGRES_HOST')
        if not host:
            raise ValueError("POSTGRES_HOST environment variable is required")

        return cls(
            host=host,
            port=int(os.getenv('POSTGRES_PORT', '5432')),
            user=os.getenv('POSTGRES_USER', 'formquota_user'),
            password=os.getenv('POSTGRES_PASSWORD', ''),
            database=os.getenv('POSTGRES_DB', 'formquota'),
            min_size=min_size,
            max_size=max_size,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> 'PostgresConfig':
        """Create config from application settings."""
        return cls(
            host=settings.postgres_host,
            port=settings.postgres_port,
            user=settings.postgres_user,
            password=settings.postgres_password,
            database=settings.postgres_db,
            min_size=settings.postgres_pool_min_size,
            max_size=settings.postgres_pool_max_size,
        )

    def to_asyncpg_kwargs(self) -> dict:
        """Convert to asyncpg.create_pool kwargs."""
        return {
            'host': self.host,
            'port': self.port,
            'user': self.user,
            'password': self.password,
            'database': self.database,
            'min_size': self.min_size,
            'max_size': self.max_size,
        }


def get_postgres_config(settings: Optional[Settings] = None) -> PostgresConfig:
    """Get PostgreSQL configuration from settings, or the environment if none given."""
    if settings is None:
        return PostgresConfig.from_env()
    return PostgresConfig.from_settings(settings)


async def create_postgres_pool(settings: Optional[Settings] = None):
    """Create PostgreSQL connection pool."""
    import asyncpg
    config = get_postgres_config(settings)
    return await asyncpg.create_pool(**config.to_asyncpg_kwargs())
