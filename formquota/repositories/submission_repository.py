"""
Submission Repository - PostgreSQL storage for submissions

Storage: PostgreSQL (submissions table, options row locks)

Admission runs inside lock_option(): one transaction holding
SELECT ... FOR UPDATE on the option row, so concurrent decisions for the
same option are serialised while different options never block each other.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional
import asyncpg

from formquota.models.domain.form import OptionRef, Submission
from formquota.models.domain.response_limit import response_limit_from_db
from formquota.services.errors import ResourceUnavailable
from formquota.repositories.storage_errors import STORAGE_ERRORS

logger = logging.getLogger(__name__)


class PostgresOptionLock:
    """
    Handle on a locked option row, valid until lock_option() exits.

    option is None when the option does not exist (nothing was locked).
    """

    def __init__(self, conn: asyncpg.Connection, option: Optional[OptionRef]):
        self.conn = conn
        self.option = option

    async def count_submissions(self) -> int:
        """Count submissions for the locked option within the transaction"""
        count = await self.conn.fetchval("""
            SELECT COUNT(*) FROM submissions WHERE option_id = $1
        """, self.option.option_id)
        return count or 0

    async def append(self, submission: Submission) -> Submission:
        """Insert the submission; visible to others only after commit"""
        submission.created_at = await self.conn.fetchval("""
            INSERT INTO submissions (submission_id, form_id, question_id, option_id)
            VALUES ($1, $2, $3, $4)
            RETURNING created_at
        """, submission.id, submission.form_id, submission.question_id, submission.option_id)
        return submission


class SubmissionRepository:
    """Repository for Submission facts and per-option admission locks"""

    def __init__(self, db_pool: asyncpg.Pool, acquire_timeout: Optional[float] = None):
        self.db_pool = db_pool
        self.acquire_timeout = acquire_timeout

    @asynccontextmanager
    async def lock_option(self, option_id: str, lock_timeout: float) -> AsyncIterator[PostgresOptionLock]:
        """
        Open a transaction and lock the option row.

        Commits when the block exits normally; any exception (or task
        cancellation) rolls back and releases the row lock.

        Args:
            option_id: Option ID (op_xxxxxxxx)
            lock_timeout: Seconds to wait for the row lock

        Raises:
            ResourceUnavailable: On lock timeout or storage failure
        """
        try:
            async with self.db_pool.acquire(timeout=self.acquire_timeout) as conn:
                async with conn.transaction():
                    await conn.execute(
                        "SELECT set_config('lock_timeout', $1, true)",
                        f"{max(1, int(lock_timeout * 1000))}ms",
                    )
                    row = await conn.fetchrow("""
                        SELECT o.option_id, o.question_id, o.response_limit, q.form_id
                        FROM options o
                        JOIN questions q ON q.question_id = o.question_id
                        WHERE o.option_id = $1
                        FOR UPDATE OF o
                    """, option_id)

                    option = None
                    if row:
                        option = OptionRef(
                            option_id=row['option_id'],
                            question_id=row['question_id'],
                            form_id=row['form_id'],
                            limit=response_limit_from_db(row['response_limit']),
                        )

                    yield PostgresOptionLock(conn, option)
        except asyncpg.exceptions.LockNotAvailableError as e:
            logger.warning(f"⏱️ Lock wait on option {option_id} exceeded {lock_timeout}s")
            raise ResourceUnavailable(f"Timed out waiting for option {option_id}") from e
        except STORAGE_ERRORS as e:
            logger.error(f"Storage failure while admitting to option {option_id}: {e}")
            raise ResourceUnavailable(f"Storage unavailable: {e}") from e

    async def count_by_option(self, option_id: str) -> int:
        """
        Count committed submissions for one option.

        Args:
            option_id: Option ID (op_xxxxxxxx)

        Returns:
            Number of submissions
        """
        try:
            async with self.db_pool.acquire() as conn:
                count = await conn.fetchval("""
                    SELECT COUNT(*) FROM submissions WHERE option_id = $1
                """, option_id)
        except STORAGE_ERRORS as e:
            raise ResourceUnavailable(f"Could not count option {option_id}: {e}") from e
        return count or 0

    async def count_by_form(self, form_id: str) -> Dict[str, int]:
        """
        Count committed submissions per option for a whole form.

        Args:
            form_id: Form ID (fm_xxxxxxxx)

        Returns:
            Dict of option_id -> count; options without submissions are absent
        """
        try:
            async with self.db_pool.acquire() as conn:
                rows = await conn.fetch("""
                    SELECT option_id, COUNT(*) AS response_count
                    FROM submissions
                    WHERE form_id = $1
                    GROUP BY option_id
                """, form_id)
        except STORAGE_ERRORS as e:
            raise ResourceUnavailable(f"Could not count submissions of form {form_id}: {e}") from e

        return {row['option_id']: row['response_count'] for row in rows}
