"""
In-process storage backend with the same contract as the PostgreSQL repositories.

Row locks are replaced by one asyncio.Lock per option id. Writes made while
an option is held are staged and appended to the log only when the block
exits normally, so a failure or cancellation leaves no partial submission.

Used by the test suite and by STORE_BACKEND=memory for local runs. State
lives in a single event loop; it is not shared across processes.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Callable, Dict, List, Optional

from formquota.models.domain.form import Form, Question, Option, OptionRef, Submission
from formquota.services.errors import ResourceUnavailable

logger = logging.getLogger(__name__)


class InMemoryDatabase:
    """
    Shared state for the in-memory repositories.

    Args:
        latency: Optional callable returning seconds to sleep at every
            simulated I/O point. Tests use it to shuffle interleavings.
    """

    def __init__(self, latency: Optional[Callable[[], float]] = None):
        self.forms: Dict[str, Form] = {}
        self.questions: Dict[str, Question] = {}
        self.options: Dict[str, Option] = {}
        self.submissions: List[Submission] = []
        self.latency = latency
        self._option_locks: Dict[str, asyncio.Lock] = {}

    async def io(self) -> None:
        """Yield to the event loop like a database round-trip would"""
        await asyncio.sleep(self.latency() if self.latency else 0)

    def option_lock(self, option_id: str) -> asyncio.Lock:
        lock = self._option_locks.get(option_id)
        if lock is None:
            lock = self._option_locks[option_id] = asyncio.Lock()
        return lock

    def is_locked(self, option_id: str) -> bool:
        lock = self._option_locks.get(option_id)
        return lock is not None and lock.locked()

    def count_committed(self, option_id: str) -> int:
        return sum(1 for s in self.submissions if s.option_id == option_id)


class InMemoryOptionLock:
    """Handle on a held option; writes are staged until commit"""

    def __init__(self, db: InMemoryDatabase, option: Optional[OptionRef]):
        self.db = db
        self.option = option
        self._staged: List[Submission] = []

    async def count_submissions(self) -> int:
        await self.db.io()
        return self.db.count_committed(self.option.option_id) + len(self._staged)

    async def append(self, submission: Submission) -> Submission:
        await self.db.io()
        submission.created_at = datetime.now(timezone.utc)
        self._staged.append(submission)
        return submission

    def commit(self) -> None:
        self.db.submissions.extend(self._staged)
        self._staged = []


class InMemoryFormRepository:
    """In-memory counterpart of FormRepository"""

    def __init__(self, db: InMemoryDatabase):
        self.db = db

    async def create_full_form(self, form: Form) -> Form:
        await self.db.io()
        form.created_at = datetime.now(timezone.utc)
        self.db.forms[form.id] = Form(
            id=form.id,
            title=form.title,
            description=form.description,
            created_at=form.created_at,
        )
        for question in form.questions:
            self.db.questions[question.id] = question
        for option in form.iter_options():
            self.db.options[option.id] = option

        logger.info(f"📝 Created form {form.id} ({len(form.questions)} questions)")
        return form

    async def get_by_id(self, form_id: str) -> Optional[Form]:
        await self.db.io()
        form = self.db.forms.get(form_id)
        if form is None:
            return None
        return Form(id=form.id, title=form.title, description=form.description, created_at=form.created_at)

    async def get_questions(self, form_id: str) -> List[Question]:
        await self.db.io()
        questions = sorted(
            (q for q in self.db.questions.values() if q.form_id == form_id),
            key=lambda q: (q.order, q.id),
        )
        return [
            Question(
                id=q.id,
                form_id=q.form_id,
                text=q.text,
                order=q.order,
                type=q.type,
                options=sorted(q.options, key=lambda o: (o.position, o.id)),
            )
            for q in questions
        ]


class InMemorySubmissionRepository:
    """In-memory counterpart of SubmissionRepository"""

    def __init__(self, db: InMemoryDatabase):
        self.db = db

    @asynccontextmanager
    async def lock_option(self, option_id: str, lock_timeout: float) -> AsyncIterator[InMemoryOptionLock]:
        """
        Hold the option's mutex for one admission decision.

        Raises:
            ResourceUnavailable: If the mutex is not acquired within lock_timeout
        """
        option = self.db.options.get(option_id)
        if option is None:
            yield InMemoryOptionLock(self.db, None)
            return

        lock = self.db.option_lock(option_id)
        try:
            async with asyncio.timeout(lock_timeout):
                await lock.acquire()
        except TimeoutError as e:
            logger.warning(f"⏱️ Lock wait on option {option_id} exceeded {lock_timeout}s")
            raise ResourceUnavailable(f"Timed out waiting for option {option_id}") from e

        try:
            held = InMemoryOptionLock(self.db, OptionRef(
                option_id=option.id,
                question_id=option.question_id,
                form_id=self.db.questions[option.question_id].form_id,
                limit=option.limit,
            ))
            yield held
            await self.db.io()
            held.commit()
        finally:
            lock.release()

    async def count_by_option(self, option_id: str) -> int:
        await self.db.io()
        return self.db.count_committed(option_id)

    async def count_by_form(self, form_id: str) -> Dict[str, int]:
        await self.db.io()
        counts: Dict[str, int] = {}
        for submission in self.db.submissions:
            if submission.form_id == form_id:
                counts[submission.option_id] = counts.get(submission.option_id, 0) + 1
        return counts
