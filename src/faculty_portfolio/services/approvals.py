"""Approval workflow for items uploaded by regular faculty members.

State machine for a request:

    PENDING   -> APPROVED | REJECTED | FORWARDED
    FORWARDED -> APPROVED | REJECTED   (dean only)
    REJECTED  -> PENDING               (resubmission by the submitter)

Reviewers cannot act on APPROVED or REJECTED requests. The reviewed
item's status mirrors the request, with FORWARDED leaving the item PENDING.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from faculty_portfolio.constants import (
    ApprovalStatus,
    FacultyRole,
    ItemStatus,
    ReviewAction,
)
from faculty_portfolio.data.db import get_session
from faculty_portfolio.data.models import ApprovalRequest, Faculty, PortfolioItem
from faculty_portfolio.services import access
from faculty_portfolio.services.errors import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from faculty_portfolio.services.lookup import faculty_summary, load_faculty

logger = logging.getLogger(__name__)

__all__ = [
    "get_request",
    "list_my_submissions",
    "list_reviewable",
    "resubmit",
    "review",
    "submit_for_approval",
]

_TERMINAL_STATUSES = (ApprovalStatus.APPROVED, ApprovalStatus.REJECTED)

_ACTION_RESULTS: dict[ReviewAction, tuple[ApprovalStatus, ItemStatus]] = {
    ReviewAction.APPROVE: (ApprovalStatus.APPROVED, ItemStatus.APPROVED),
    ReviewAction.REJECT: (ApprovalStatus.REJECTED, ItemStatus.REJECTED),
    ReviewAction.FORWARD: (ApprovalStatus.FORWARDED, ItemStatus.PENDING),
}


def _request_to_dict(request: ApprovalRequest) -> dict:
    item = request.item
    portfolio = item.portfolio
    return {
        "id": request.id,
        "item_id": item.id,
        "item_name": item.name,
        "item_status": item.status,
        "portfolio_id": item.portfolio_id,
        "portfolio_name": portfolio.name if portfolio else None,
        "dept_code": access.request_department(request),
        "submitted_by": faculty_summary(request.submitted_by),
        "reviewed_by": faculty_summary(request.reviewed_by),
        "comments": request.comments,
        "feedback": request.feedback,
        "status": request.status,
        "submitted_at": request.submitted_at,
        "reviewed_at": request.reviewed_at,
    }


def _load_request(session: Session, request_id: int) -> ApprovalRequest:
    request = session.get(ApprovalRequest, request_id)
    if request is None:
        raise NotFoundError(f"Approval request {request_id} not found")
    return request


def _parse_action(action: str | ReviewAction) -> ReviewAction:
    try:
        return ReviewAction(str(action).strip().upper())
    except ValueError as exc:
        raise ValidationError(f"Invalid review action: {action}") from exc


def submit_for_approval(
    session: Session, item: PortfolioItem, submitter: Faculty, comments: str | None
) -> ApprovalRequest:
    """Attach a PENDING approval request to a freshly uploaded item.

    Runs inside the caller's session so the item and request commit together.
    """
    request = ApprovalRequest(
        submitted_by=submitter,
        comments=(comments or "").strip() or None,
        status=ApprovalStatus.PENDING,
    )
    item.approval_requests.append(request)
    item.status = ItemStatus.PENDING
    session.flush()
    logger.info("Item %s submitted for approval by faculty %s", item.id, submitter.id)
    return request


def list_reviewable(faculty_id: int) -> list[dict]:
    """Return requests the caller may act on, oldest first.

    Deans see every PENDING and FORWARDED request, department heads the
    PENDING requests of their department, and regular faculty nothing.
    """
    with get_session() as session:
        reviewer = load_faculty(session, faculty_id)
        if reviewer.role == FacultyRole.DEAN:
            statuses = (ApprovalStatus.PENDING, ApprovalStatus.FORWARDED)
        elif reviewer.role == FacultyRole.DEPT_HEAD:
            statuses = (ApprovalStatus.PENDING,)
        else:
            return []

        candidates = (
            session.query(ApprovalRequest)
            .filter(ApprovalRequest.status.in_(statuses))
            .order_by(ApprovalRequest.submitted_at.asc(), ApprovalRequest.id.asc())
            .all()
        )
        return [_request_to_dict(r) for r in candidates if access.can_review(reviewer, r)]


def list_my_submissions(faculty_id: int) -> list[dict]:
    """Return the caller's own requests, newest first."""
    with get_session() as session:
        submitter = load_faculty(session, faculty_id)
        requests = (
            session.query(ApprovalRequest)
            .filter(ApprovalRequest.submitted_by_id == submitter.id)
            .order_by(ApprovalRequest.submitted_at.desc(), ApprovalRequest.id.desc())
            .all()
        )
        return [_request_to_dict(r) for r in requests]


def get_request(faculty_id: int, request_id: int) -> dict:
    """Return one request if the caller submitted, reviewed or may review it."""
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        request = _load_request(session, request_id)
        visible = (
            request.submitted_by_id == faculty.id
            or request.reviewed_by_id == faculty.id
            or access.can_review(faculty, request)
        )
        if not visible:
            logger.warning("Faculty %s denied view of request %s", faculty.id, request.id)
            raise PermissionDeniedError(f"No access to approval request {request_id}")
        return _request_to_dict(request)


def review(
    faculty_id: int,
    request_id: int,
    action: str | ReviewAction,
    feedback: str | None = None,
) -> dict:
    """Apply a reviewer action to a request.

    Args:
        faculty_id: Reviewer.
        request_id: Request being reviewed.
        action: APPROVE, REJECT or FORWARD.
        feedback: Optional reviewer feedback.

    Returns:
        Dictionary with the updated request.

    Raises:
        ValidationError: Unknown action.
        ConflictError: The request is already APPROVED or REJECTED.
        PermissionDeniedError: The caller may not review this request, or
            tried to forward without being a department head.
    """
    parsed = _parse_action(action)

    with get_session() as session:
        reviewer = load_faculty(session, faculty_id)
        request = _load_request(session, request_id)

        if request.status in _TERMINAL_STATUSES:
            raise ConflictError(f"Approval request {request_id} is already {request.status}")
        access.require_review(reviewer, request)
        if parsed == ReviewAction.FORWARD and reviewer.role != FacultyRole.DEPT_HEAD:
            logger.warning("Faculty %s (%s) attempted to forward", reviewer.id, reviewer.role)
            raise PermissionDeniedError("Only a department head can forward a request")

        request_status, item_status = _ACTION_RESULTS[parsed]
        request.status = request_status
        request.reviewed_by = reviewer
        request.reviewed_at = datetime.now(UTC)
        request.feedback = (feedback or "").strip() or None
        request.item.status = item_status

        session.flush()
        result = _request_to_dict(request)

    logger.info(
        "Faculty %s set approval request %s to %s", faculty_id, request_id, request_status
    )
    return result


def resubmit(faculty_id: int, request_id: int, comments: str | None = None) -> dict:
    """Put a REJECTED request back to PENDING.

    Raises:
        PermissionDeniedError: The caller is not the submitter.
        ConflictError: The request is not REJECTED.
    """
    with get_session() as session:
        submitter = load_faculty(session, faculty_id)
        request = _load_request(session, request_id)

        if request.submitted_by_id != submitter.id:
            logger.warning("Faculty %s tried to resubmit request %s", submitter.id, request.id)
            raise PermissionDeniedError("Only the submitter can resubmit a request")
        if request.status != ApprovalStatus.REJECTED:
            raise ConflictError(f"Only rejected requests can be resubmitted (is {request.status})")

        request.status = ApprovalStatus.PENDING
        request.reviewed_by = None
        request.reviewed_at = None
        request.feedback = None
        request.submitted_at = datetime.now(UTC)
        if comments is not None:
            request.comments = comments.strip() or None
        request.item.status = ItemStatus.PENDING

        session.flush()
        result = _request_to_dict(request)

    logger.info("Faculty %s resubmitted approval request %s", faculty_id, request_id)
    return result
