"""
Read-side projection of a form: structure merged with consumption counts.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from formquota.models.domain.response_limit import ResponseLimit


@dataclass
class OptionSnapshot:
    option_id: str
    text: str
    limit: ResponseLimit
    consumed_count: int = 0

    @property
    def exhausted(self) -> bool:
        return self.limit.is_exhausted(self.consumed_count)


@dataclass
class QuestionSnapshot:
    question_id: str
    text: str
    type: str
    order: int
    options: List[OptionSnapshot] = field(default_factory=list)


@dataclass
class FormSnapshot:
    """
    Best-effort view of a form and how much of each option is used.

    Counts come from committed submissions at read time; a concurrent
    admission may land an instant later.
    """
    form_id: str
    title: str
    description: Optional[str]
    created_at: Optional[datetime] = None
    questions: List[QuestionSnapshot] = field(default_factory=list)
