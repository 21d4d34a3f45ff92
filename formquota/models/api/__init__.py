"""
API request/response schemas
"""
from .form import (
    OptionCreate,
    QuestionCreate,
    FormCreate,
    FormCreated,
    SubmissionCreate,
    SubmissionResult,
    OptionDetail,
    QuestionDetail,
    FormDetail,
)

__all__ = [
    'OptionCreate',
    'QuestionCreate',
    'FormCreate',
    'FormCreated',
    'SubmissionCreate',
    'SubmissionResult',
    'OptionDetail',
    'QuestionDetail',
    'FormDetail',
]
