"""
Domain models - storage-agnostic representations
"""
from .response_limit import ResponseLimit, Unlimited, Capped, UNLIMITED, response_limit_from_db
from .form import Form, Question, Option, OptionRef, Submission, DEFAULT_QUESTION_TYPE
from .snapshot import FormSnapshot, QuestionSnapshot, OptionSnapshot
from .admission import AdmissionOutcome, AdmissionStatus, RejectionReason

__all__ = [
    'ResponseLimit',
    'Unlimited',
    'Capped',
    'UNLIMITED',
    'response_limit_from_db',
    'Form',
    'Question',
    'Option',
    'OptionRef',
    'Submission',
    'DEFAULT_QUESTION_TYPE',
    'FormSnapshot',
    'QuestionSnapshot',
    'OptionSnapshot',
    'AdmissionOutcome',
    'AdmissionStatus',
    'RejectionReason',
]
