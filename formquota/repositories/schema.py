"""
PostgreSQL schema for forms, questions, options and submissions.

Statements are idempotent so they can run on every startup.
"""
import logging

import asyncpg

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS forms (
        form_id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        description TEXT,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS questions (
        question_id TEXT PRIMARY KEY,
        form_id TEXT NOT NULL REFERENCES forms(form_id),
        question_text TEXT NOT NULL,
        question_type TEXT NOT NULL DEFAULT 'single_choice',
        display_order INTEGER NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS options (
        option_id TEXT PRIMARY KEY,
        question_id TEXT NOT NULL REFERENCES questions(question_id),
        option_text TEXT NOT NULL,
        position INTEGER NOT NULL DEFAULT 0,
        response_limit INTEGER CHECK (response_limit IS NULL OR response_limit >= 0)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS submissions (
        submission_id TEXT PRIMARY KEY,
        form_id TEXT NOT NULL REFERENCES forms(form_id),
        question_id TEXT NOT NULL REFERENCES questions(question_id),
        option_id TEXT NOT NULL REFERENCES options(option_id),
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_questions_form_order ON questions (form_id, display_order)",
    "CREATE INDEX IF NOT EXISTS idx_options_question_position ON options (question_id, position)",
    "CREATE INDEX IF NOT EXISTS idx_submissions_option ON submissions (option_id)",
    "CREATE INDEX IF NOT EXISTS idx_submissions_form_option ON submissions (form_id, option_id)",
]

DROP_STATEMENTS = [
    "DROP TABLE IF EXISTS submissions",
    "DROP TABLE IF EXISTS options",
    "DROP TABLE IF EXISTS questions",
    "DROP TABLE IF EXISTS forms",
]


async def ensure_schema(db_pool: asyncpg.Pool) -> None:
    """Create tables and indexes if they do not exist."""
    async with db_pool.acquire() as conn:
        async with conn.transaction():
            for statement in SCHEMA_STATEMENTS:
                await conn.execute(statement)
    logger.info(f"Schema ready ({len(SCHEMA_STATEMENTS)} statements)")


async def drop_schema(db_pool: asyncpg.Pool) -> None:
    """Drop all tables. Used by integration tests to start fresh."""
    async with db_pool.acquire() as conn:
        for statement in DROP_STATEMENTS:
            await conn.execute(statement)
    logger.info("Dropped form tables")
