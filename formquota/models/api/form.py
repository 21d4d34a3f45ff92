"""
Pydantic models for forms and submissions
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from formquota.models.domain.form import DEFAULT_QUESTION_TYPE
from formquota.models.domain.snapshot import FormSnapshot


class OptionCreate(BaseModel):
    """Option in a form creation payload; omit limit for unlimited"""
    text: str = Field(..., min_length=1)
    limit: Optional[int] = Field(default=None, ge=0)


class QuestionCreate(BaseModel):
    """Question in a form creation payload"""
    text: str = Field(..., min_length=1)
    type: str = DEFAULT_QUESTION_TYPE
    order: int = 0
    options: List[OptionCreate] = Field(default_factory=list)


class FormCreate(BaseModel):
    """Request model for creating a form with its questions and options"""
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    questions: List[QuestionCreate] = Field(..., min_length=1)


class FormCreated(BaseModel):
    message: str
    form_id: str


class SubmissionCreate(BaseModel):
    """Request model for submitting one selection"""
    question_id: str
    option_id: str


class SubmissionResult(BaseModel):
    """Response model for a submission attempt"""
    status: str  # admitted, rejected, error
    reason: Optional[str] = None  # exhausted, invalid
    submission_id: Optional[str] = None
    detail: Optional[str] = None


class OptionDetail(BaseModel):
    option_id: str
    text: str
    limit: Optional[int] = None  # None means unlimited
    consumed_count: int
    exhausted: bool


class QuestionDetail(BaseModel):
    question_id: str
    text: str
    type: str
    order: int
    options: List[OptionDetail]


class FormDetail(BaseModel):
    """Response model for a form with per-option consumption"""
    form_id: str
    title: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    questions: List[QuestionDetail]

    @classmethod
    def from_snapshot(cls, snapshot: FormSnapshot) -> 'FormDetail':
        return cls(
            form_id=snapshot.form_id,
            title=snapshot.title,
            description=snapshot.description,
            created_at=snapshot.created_at,
            questions=[
                QuestionDetail(
                    question_id=q.question_id,
                    text=q.text,
                    type=q.type,
                    order=q.order,
                    options=[
                        OptionDetail(
                            option_id=o.option_id,
                            text=o.text,
                            limit=o.limit.to_db(),
                            consumed_count=o.consumed_count,
                            exhausted=o.exhausted,
                        )
                        for o in q.options
                    ],
                )
                for q in snapshot.questions
            ],
        )
