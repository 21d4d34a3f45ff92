"""
Capacity Ledger - consumption per option, derived from committed submissions.

Nothing here is stored separately: every count is a COUNT over the
submissions table (or the in-memory append log).
"""
import logging
from collections import Counter
from typing import Dict

logger = logging.getLogger(__name__)


class CapacityLedger:
    """Counts submissions per option for the allocator and the aggregator"""

    def __init__(self, submission_repo):
        """
        Args:
            submission_repo: SubmissionRepository or InMemorySubmissionRepository
        """
        self.submission_repo = submission_repo

    async def consumed_under_lock(self, held) -> int:
        """
        Current consumption of the option held by `held`.

        Must be called inside lock_option() so the count cannot move
        before the caller's insert commits.
        """
        return await held.count_submissions()

    async def consumption_for_form(self, form_id: str) -> Counter:
        """
        Consumption of every option of a form in one aggregate query.

        Returns:
            Counter keyed by option_id; options without submissions read as 0
        """
        counts: Dict[str, int] = await self.submission_repo.count_by_form(form_id)
        return Counter(counts)
