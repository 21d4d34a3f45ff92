"""
Forms API router

Endpoints:
- POST /api/forms - create a form with its questions and options
- GET /api/forms/{form_id} - form with per-option consumption
- POST /api/forms/{form_id}/submissions - submit one selection
"""

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import JSONResponse
import logging

from formquota.models.api.form import (
    FormCreate,
    FormCreated,
    FormDetail,
    SubmissionCreate,
    SubmissionResult,
)
from formquota.models.domain.admission import AdmissionOutcome, AdmissionStatus, RejectionReason
from formquota.models.domain.form import Form, Question, Option
from formquota.models.domain.response_limit import UNLIMITED, Capped
from formquota.services.errors import ResourceUnavailable

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/forms", tags=["forms"])


def outcome_status_code(outcome: AdmissionOutcome) -> int:
    """HTTP status for an admission outcome"""
    if outcome.status == AdmissionStatus.ADMITTED:
        return status.HTTP_201_CREATED
    if outcome.reason == RejectionReason.EXHAUSTED:
        return status.HTTP_409_CONFLICT
    if outcome.reason == RejectionReason.INVALID:
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def form_from_payload(payload: FormCreate) -> Form:
    """Build the domain graph; ids are generated by the models"""
    return Form(
        id="",
        title=payload.title,
        description=payload.description,
        questions=[
            Question(
                id="",
                form_id="",
                text=q.text,
                type=q.type,
                order=q.order,
                options=[
                    Option(
                        id="",
                        question_id="",
                        text=o.text,
                        position=position,
                        limit=UNLIMITED if o.limit is None else Capped(o.limit),
                    )
                    for position, o in enumerate(q.options)
                ],
            )
            for q in payload.questions
        ],
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=FormCreated)
async def create_form(payload: FormCreate, request: Request):
    """
    Create a form, its questions and options in one transaction
    """
    store = request.app.state.store
    try:
        form = await store.forms.create_full_form(form_from_payload(payload))
    except ResourceUnavailable as e:
        logger.error(f"Error creating form: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return FormCreated(message="Form created", form_id=form.id)


@router.get("/{form_id}", response_model=FormDetail)
async def get_form(form_id: str, request: Request):
    """
    Get a form with questions, options, consumed counts and exhaustion flags
    """
    aggregator = request.app.state.aggregator
    try:
        snapshot = await aggregator.describe(form_id)
    except ResourceUnavailable as e:
        logger.error(f"Error reading form {form_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    if snapshot is None:
        raise HTTPException(status_code=404, detail="Form not found")

    return FormDetail.from_snapshot(snapshot)


@router.post("/{form_id}/submissions", response_model=SubmissionResult)
async def submit_response(form_id: str, payload: SubmissionCreate, request: Request):
    """
    Submit one selection

    Returns:
        201 admitted, 409 exhausted, 404 invalid, 500 error
    """
    allocator = request.app.state.allocator
    outcome = await allocator.submit(form_id, payload.question_id, payload.option_id)

    result = SubmissionResult(
        status=outcome.status.value,
        reason=outcome.reason.value if outcome.reason else None,
        submission_id=outcome.submission.id if outcome.submission else None,
        # fault details stay in the logs
        detail=None if outcome.is_unavailable else outcome.detail,
    )
    return JSONResponse(
        status_code=outcome_status_code(outcome),
        content=result.model_dump(exclude_none=True),
    )
