"""
Repository Pattern - Storage abstraction layer

Repositories hide storage details from the allocator and aggregator.
Consumers work with domain models, not storage-specific types.

Backends:
- PostgreSQL (asyncpg): FormRepository, SubmissionRepository
- In-process: InMemoryFormRepository, InMemorySubmissionRepository

Both backends expose the same methods; open_store() picks one from settings.
"""
from .form_repository import FormRepository
from .submission_repository import SubmissionRepository, PostgresOptionLock
from .memory import (
    InMemoryDatabase,
    InMemoryFormRepository,
    InMemorySubmissionRepository,
    InMemoryOptionLock,
)
from .store import Store, open_store

__all__ = [
    'FormRepository',
    'SubmissionRepository',
    'PostgresOptionLock',
    'InMemoryDatabase',
    'InMemoryFormRepository',
    'InMemorySubmissionRepository',
    'InMemoryOptionLock',
    'Store',
    'open_store',
]
