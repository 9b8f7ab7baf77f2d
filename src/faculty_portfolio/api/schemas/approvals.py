"""Pydantic schemas for approval workflow endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from faculty_portfolio.api.schemas.common import FacultySummary
from faculty_portfolio.constants import ApprovalStatus, ItemStatus


class ApprovalResponse(BaseModel):
    """Response schema for an approval request."""

    id: int
    item_id: int
    item_name: str
    item_status: ItemStatus
    portfolio_id: int | None = None
    portfolio_name: str | None = None
    dept_code: str | None = None
    submitted_by: FacultySummary
    reviewed_by: FacultySummary | None = None
    comments: str | None = None
    feedback: str | None = None
    status: ApprovalStatus
    submitted_at: datetime
    reviewed_at: datetime | None = None


class ReviewRequest(BaseModel):
    """Request schema for a reviewer action."""

    action: str = Field(..., description="APPROVE, REJECT or FORWARD")
    feedback: str | None = Field(None, description="Feedback for the submitter")


class ResubmitRequest(BaseModel):
    comments: str | None = Field(None, description="Updated submitter comments")
