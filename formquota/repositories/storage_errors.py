"""
Driver-level failures that mean "storage unavailable right now".

Lock timeouts (LockNotAvailableError), serialization failures and
deadlocks are PostgresError subclasses; connection loss surfaces as
InterfaceError or OSError; pool acquire timeouts as TimeoutError.
"""
import asyncio

import asyncpg

STORAGE_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)
