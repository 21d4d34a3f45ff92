"""
Form Repository - PostgreSQL storage for forms, questions and options

Storage: PostgreSQL (forms, questions, options tables)

Forms are written once, with all their questions and options, in a single
transaction. Reads never lock: the structure is immutable after creation.
"""
import logging
from typing import Dict, List, Optional
import asyncpg

from formquota.models.domain.form import Form, Question, Option
from formquota.models.domain.response_limit import response_limit_from_db
from formquota.services.errors import ResourceUnavailable
from formquota.repositories.storage_errors import STORAGE_ERRORS

logger = logging.getLogger(__name__)


class FormRepository:
    """
    Repository for Form domain model

    Handles the authoring write path and the structural reads used by
    the aggregator.
    """

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def create_full_form(self, form: Form) -> Form:
        """
        Create a form with its questions and options.

        Uses a transaction so a failure on any question or option leaves
        no trace of the form.

        Args:
            form: Form model with questions and options attached

        Returns:
            Created form with database timestamp

        Raises:
            ResourceUnavailable: If storage fails
        """
        try:
            async with self.db_pool.acquire() as conn:
                async with conn.transaction():
                    form.created_at = await conn.fetchval("""
                        INSERT INTO forms (form_id, title, description)
                        VALUES ($1, $2, $3)
                        RETURNING created_at
                    """, form.id, form.title, form.description)

                    for question in form.questions:
                        await conn.execute("""
                            INSERT INTO questions (question_id, form_id, question_text, question_type, display_order)
                            VALUES ($1, $2, $3, $4, $5)
                        """, question.id, form.id, question.text, question.type, question.order)

                        if question.options:
                            await conn.executemany("""
                                INSERT INTO options (option_id, question_id, option_text, position, response_limit)
                                VALUES ($1, $2, $3, $4, $5)
                            """, [
                                (o.id, question.id, o.text, o.position, o.limit.to_db())
                                for o in question.options
                            ])
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to create form {form.id}: {e}")
            raise ResourceUnavailable(f"Could not store form: {e}") from e

        option_count = sum(1 for _ in form.iter_options())
        logger.info(f"📝 Created form {form.id} ({len(form.questions)} questions, {option_count} options)")
        return form

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, form_id: str) -> Optional[Form]:
        """
        Retrieve form by ID, without questions.

        Args:
            form_id: Form ID (fm_xxxxxxxx)

        Returns:
            Form model or None
        """
        try:
            async with self.db_pool.acquire() as conn:
                row = await conn.fetchrow("""
                    SELECT form_id, title, description, created_at
                    FROM forms
                    WHERE form_id = $1
                """, form_id)
        except STORAGE_ERRORS as e:
            raise ResourceUnavailable(f"Could not read form {form_id}: {e}") from e

        if not row:
            return None

        return Form(
            id=row['form_id'],
            title=row['title'],
            description=row['description'],
            created_at=row['created_at'],
        )

    async def get_questions(self, form_id: str) -> List[Question]:
        """
        Get all questions of a form with their options.

        Args:
            form_id: Form ID (fm_xxxxxxxx)

        Returns:
            Questions in display order, options in position order
        """
        try:
            async with self.db_pool.acquire() as conn:
                rows = await conn.fetch("""
                    SELECT q.question_id, q.question_text, q.question_type, q.display_order,
                           o.option_id, o.option_text, o.position, o.response_limit
                    FROM questions q
                    LEFT JOIN options o ON o.question_id = q.question_id
                    WHERE q.form_id = $1
                    ORDER BY q.display_order, q.question_id, o.position, o.option_id
                """, form_id)
        except STORAGE_ERRORS as e:
            raise ResourceUnavailable(f"Could not read questions of form {form_id}: {e}") from e

        questions: Dict[str, Question] = {}
        for row in rows:
            question = questions.get(row['question_id'])
            if question is None:
                question = Question(
                    id=row['question_id'],
                    form_id=form_id,
                    text=row['question_text'],
                    type=row['question_type'],
                    order=row['display_order'],
                )
                questions[question.id] = question

            # LEFT JOIN yields one NULL option row for questions without options
            if row['option_id'] is None:
                continue

            question.options.append(Option(
                id=row['option_id'],
                question_id=question.id,
                text=row['option_text'],
                position=row['position'],
                limit=response_limit_from_db(row['response_limit']),
            ))

        return list(questions.values())
