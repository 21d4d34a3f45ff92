"""
Admission outcome - result of one submission attempt.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from formquota.models.domain.form import Submission


class AdmissionStatus(str, Enum):
    ADMITTED = "admitted"
    REJECTED = "rejected"
    ERROR = "error"


class RejectionReason(str, Enum):
    EXHAUSTED = "exhausted"  # option reached its response limit
    INVALID = "invalid"  # form/question/option missing or mismatched


@dataclass(frozen=True)
class AdmissionOutcome:
    """
    Admitted, Rejected(Exhausted), Rejected(Invalid) or Unavailable.

    Unavailable (status ERROR) means a transient fault; nothing was
    written and the caller may retry the whole submission.
    """
    status: AdmissionStatus
    reason: Optional[RejectionReason] = None
    submission: Optional[Submission] = None
    detail: Optional[str] = None

    @classmethod
    def admitted(cls, submission: Submission) -> 'AdmissionOutcome':
        return cls(status=AdmissionStatus.ADMITTED, submission=submission)

    @classmethod
    def exhausted(cls, detail: Optional[str] = None) -> 'AdmissionOutcome':
        return cls(status=AdmissionStatus.REJECTED, reason=RejectionReason.EXHAUSTED, detail=detail)

    @classmethod
    def invalid(cls, detail: Optional[str] = None) -> 'AdmissionOutcome':
        return cls(status=AdmissionStatus.REJECTED, reason=RejectionReason.INVALID, detail=detail)

    @classmethod
    def unavailable(cls, detail: Optional[str] = None) -> 'AdmissionOutcome':
        return cls(status=AdmissionStatus.ERROR, detail=detail)

    @property
    def is_admitted(self) -> bool:
        return self.status == AdmissionStatus.ADMITTED

    @property
    def is_exhausted(self) -> bool:
        return self.reason == RejectionReason.EXHAUSTED

    @property
    def is_invalid(self) -> bool:
        return self.reason == RejectionReason.INVALID

    @property
    def is_unavailable(self) -> bool:
        return self.status == AdmissionStatus.ERROR
