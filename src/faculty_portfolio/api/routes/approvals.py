"""Approval workflow routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from faculty_portfolio.api.dependencies import get_current_faculty_id
from faculty_portfolio.api.schemas.approvals import (
    ApprovalResponse,
    ResubmitRequest,
    ReviewRequest,
)
from faculty_portfolio.services import approvals as approval_service

router = APIRouter(prefix="/approvals", tags=["approvals"])

CurrentFaculty = Annotated[int, Depends(get_current_faculty_id)]
RequestId = Annotated[int, Path(description="Approval request ID")]


@router.get("/reviewable", response_model=list[ApprovalResponse])
def list_reviewable(faculty_id: CurrentFaculty) -> list[ApprovalResponse]:
    """List requests awaiting the caller's review, oldest first."""
    return [ApprovalResponse(**r) for r in approval_service.list_reviewable(faculty_id)]


@router.get("/mine", response_model=list[ApprovalResponse])
def list_my_submissions(faculty_id: CurrentFaculty) -> list[ApprovalResponse]:
    return [ApprovalResponse(**r) for r in approval_service.list_my_submissions(faculty_id)]


@router.get("/{request_id}", response_model=ApprovalResponse)
def get_request(request_id: RequestId, faculty_id: CurrentFaculty) -> ApprovalResponse:
    return ApprovalResponse(**approval_service.get_request(faculty_id, request_id))


@router.post(
    "/{request_id}/review",
    response_model=ApprovalResponse,
    responses={
        400: {"description": "Unknown action"},
        403: {"description": "Caller may not review or forward this request"},
        409: {"description": "Request already approved or rejected"},
    },
)
def review_request(
    request_id: RequestId,
    data: ReviewRequest,
    faculty_id: CurrentFaculty,
) -> ApprovalResponse:
    """Approve, reject or forward a request."""
    result = approval_service.review(faculty_id, request_id, data.action, data.feedback)
    return ApprovalResponse(**result)


@router.post("/{request_id}/resubmit", response_model=ApprovalResponse)
def resubmit_request(
    request_id: RequestId,
    faculty_id: CurrentFaculty,
    data: ResubmitRequest | None = None,
) -> ApprovalResponse:
    """Send a rejected request back for review."""
    comments = data.comments if data is not None else None
    return ApprovalResponse(**approval_service.resubmit(faculty_id, request_id, comments))
