"""
Form domain models - storage-agnostic representation

Storage: PostgreSQL (forms, questions, options, submissions tables)

A Form owns ordered Questions; each Question owns Options. Options carry
the response limit that caps how many Submissions may reference them.
Forms, questions and options are written once by the authoring path and
never mutated afterwards. Submissions are append-only facts.

ID formats: fm_xxxxxxxx, qs_xxxxxxxx, op_xxxxxxxx, sb_xxxxxxxx
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from formquota.models.domain.response_limit import ResponseLimit, UNLIMITED
from formquota.utils.id_generator import (
    generate_form_id,
    generate_option_id,
    generate_question_id,
    generate_submission_id,
    validate_id,
)

DEFAULT_QUESTION_TYPE = "single_choice"


@dataclass
class Option:
    """Selectable choice under a question"""
    id: str  # op_xxxxxxxx
    question_id: str  # qs_xxxxxxxx
    text: str
    position: int = 0
    limit: ResponseLimit = UNLIMITED

    def __post_init__(self):
        if not validate_id(self.id, 'option'):
            self.id = generate_option_id()


@dataclass
class Question:
    """Question of a form, shown in display order"""
    id: str  # qs_xxxxxxxx
    form_id: str  # fm_xxxxxxxx
    text: str
    order: int = 0
    type: str = DEFAULT_QUESTION_TYPE
    options: List[Option] = field(default_factory=list)

    def __post_init__(self):
        if not validate_id(self.id, 'question'):
            self.id = generate_question_id()
        for option in self.options:
            option.question_id = self.id


@dataclass
class Form:
    """
    Form domain model

    Created together with its questions and options in a single
    transaction; treated as immutable afterwards.
    """
    id: str  # fm_xxxxxxxx
    title: str
    description: Optional[str] = None
    questions: List[Question] = field(default_factory=list)
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not validate_id(self.id, 'form'):
            self.id = generate_form_id()
        for question in self.questions:
            question.form_id = self.id

    def iter_options(self):
        for question in self.questions:
            yield from question.options


@dataclass
class OptionRef:
    """
    Capacity-defining view of an option, read under its lock.

    Carries the owning question's form so admission can check the
    form/question/option chain without extra queries.
    """
    option_id: str
    question_id: str
    form_id: str
    limit: ResponseLimit = UNLIMITED


@dataclass
class Submission:
    """One admitted selection of one option"""
    id: str  # sb_xxxxxxxx
    form_id: str
    question_id: str
    option_id: str
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not validate_id(self.id, 'submission'):
            self.id = generate_submission_id()
