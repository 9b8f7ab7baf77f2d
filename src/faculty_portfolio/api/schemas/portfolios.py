"""Pydantic schemas for portfolio and sharing endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from faculty_portfolio.api.schemas.common import FacultySummary
from faculty_portfolio.constants import PortfolioType, SharePermission


class PortfolioResponse(BaseModel):
    """Response schema for portfolio data."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    type: PortfolioType
    owner_id: int
    owner_name: str | None = None
    dept_code: str | None = None
    created_at: datetime
    is_active: bool
    item_count: int = 0
    can_edit: bool = False
    can_manage: bool = False


class PortfolioCreateRequest(BaseModel):
    """Request schema for creating a portfolio."""

    name: str = Field(..., max_length=100, description="Portfolio name, unique per owner")
    description: str | None = Field(None, max_length=500)
    type: str = Field("PERSONAL", description="PERSONAL, DEPARTMENT or COLLEGE")


class PortfolioUpdateRequest(BaseModel):
    """Request schema for updating a portfolio.

    All fields are optional; only provided fields are updated.
    """

    name: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=500)
    is_active: bool | None = None


class ShareCreateRequest(BaseModel):
    """Request schema for sharing a portfolio with another faculty member."""

    faculty_id: int = Field(..., description="Recipient faculty id")
    permission: str = Field("VIEW", description="VIEW or EDIT")


class ShareUpdateRequest(BaseModel):
    permission: str = Field(..., description="VIEW or EDIT")


class ShareResponse(BaseModel):
    """Response schema for a portfolio share."""

    id: int
    portfolio_id: int
    shared_with_id: int
    shared_with: FacultySummary | None = None
    permission: SharePermission
    shared_at: datetime


class SharedPortfolioResponse(BaseModel):
    """A portfolio shared with the caller, with the grant and its owner."""

    share_id: int
    permission: SharePermission
    shared_at: datetime
    portfolio: PortfolioResponse
    owner: FacultySummary | None = None
