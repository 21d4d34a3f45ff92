from pydantic_settings import BaseSettings
from pydantic import field_validator
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables can come from:
    - docker-compose.yml environment section
    - .env file
    - System environment

    Variable names match docker-compose conventions:
    - POSTGRES_HOST, POSTGRES_PORT, etc. (for database)
    - STORE_BACKEND=memory runs without PostgreSQL (tests, local demos)
    """

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    # Storage backend: "postgres" or "memory"
    store_backend: str = "postgres"
    auto_create_schema: bool = True

    # PostgreSQL (from docker-compose)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "formquota_user"
    postgres_password: str = "formquota_pass"
    postgres_db: str = "formquota"
    postgres_pool_min_size: int = 2
    postgres_pool_max_size: int = 10

    # Admission
    lock_timeout_seconds: float = 5.0
    pool_acquire_timeout_seconds: float = 10.0

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra env vars

    @field_validator('store_backend', mode='before')
    @classmethod
    def normalize_backend(cls, v):
        """Accept any casing; only postgres and memory exist"""
        value = (v or "postgres").strip().lower()
        if value not in ("postgres", "memory"):
            raise ValueError(f"store_backend must be 'postgres' or 'memory', got {v!r}")
        return value

    @field_validator('lock_timeout_seconds', 'pool_acquire_timeout_seconds')
    @classmethod
    def positive_timeout(cls, v):
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
