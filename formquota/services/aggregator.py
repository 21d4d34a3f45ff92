"""
Aggregator - nested read model of a form with per-option consumption.

Reads structure and counts independently, without option locks. The result
is a best-effort snapshot: an option can show as available an instant
before a concurrent admission exhausts it. Capacity is enforced only by the
Allocator; a strictly consistent read would have to take the same option
locks and would serialise with every admission.
"""
import logging
from typing import Optional

from formquota.models.domain.snapshot import FormSnapshot, QuestionSnapshot, OptionSnapshot
from formquota.services.ledger import CapacityLedger

logger = logging.getLogger(__name__)


class Aggregator:
    """Builds FormSnapshot from form structure and the capacity ledger"""

    def __init__(self, form_repo, submission_repo):
        self.form_repo = form_repo
        self.ledger = CapacityLedger(submission_repo)

    async def describe(self, form_id: str) -> Optional[FormSnapshot]:
        """
        Describe a form with consumed counts and exhausted flags.

        Args:
            form_id: Form ID (fm_xxxxxxxx)

        Returns:
            FormSnapshot, or None if the form does not exist

        Raises:
            ResourceUnavailable: If storage fails
        """
        form = await self.form_repo.get_by_id(form_id)
        if form is None:
            return None

        questions = await self.form_repo.get_questions(form_id)
        consumption = await self.ledger.consumption_for_form(form_id)

        return FormSnapshot(
            form_id=form.id,
            title=form.title,
            description=form.description,
            created_at=form.created_at,
            questions=[
                QuestionSnapshot(
                    question_id=question.id,
                    text=question.text,
                    type=question.type,
                    order=question.order,
                    options=[
                        OptionSnapshot(
                            option_id=option.id,
                            text=option.text,
                            limit=option.limit,
                            consumed_count=consumption[option.id],
                        )
                        for option in question.options
                    ],
                )
                for question in questions
            ],
        )
