"""Public submission form and admin submission endpoints."""

from __future__ import annotations

from typing import Any, List

from fastapi import APIRouter, Body, Depends, status
from pydantic import BaseModel

from service_request.api.deps import get_submission_service, require_admin
from service_request.core.security import AdminIdentity
from service_request.models import ServiceRequestRead
from service_request.services.submissions import SubmissionService

router = APIRouter(tags=["forms"])


class SubmissionCreated(BaseModel):
    id: int


class SubmitResponse(BaseModel):
    message: str
    data: SubmissionCreated


class MessageResponse(BaseModel):
    message: str


@router.post("/form", response_model=SubmitResponse, status_code=status.HTTP_201_CREATED)
def submit_form(
    payload: Any = Body(default=None),
    service: SubmissionService = Depends(get_submission_service),
) -> SubmitResponse:
    # Any JSON value is accepted here; the service reports what is missing.
    fields = payload if isinstance(payload, dict) else {}
    submission = service.submit(fields)
    return SubmitResponse(
        message="Submission successful. You will be contacted soon.",
        data=SubmissionCreated(id=submission.id),
    )


@router.get("/forms", response_model=List[ServiceRequestRead])
def list_forms(
    admin: AdminIdentity = Depends(require_admin),
    service: SubmissionService = Depends(get_submission_service),
) -> List[ServiceRequestRead]:
    return [ServiceRequestRead.from_row(row) for row in service.list()]


@router.post("/forms/{submission_id}/resend", response_model=MessageResponse)
def resend_form(
    submission_id: int,
    admin: AdminIdentity = Depends(require_admin),
    service: SubmissionService = Depends(get_submission_service),
) -> MessageResponse:
    service.resend(submission_id)
    return MessageResponse(message="Email successfully resent.")


__all__ = ["router"]
