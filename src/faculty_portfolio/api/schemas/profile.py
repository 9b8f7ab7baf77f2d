"""Pydantic schemas for profile endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from faculty_portfolio.constants import FacultyRole


class ProfileResponse(BaseModel):
    """Response schema for the caller's profile."""

    id: int
    first_name: str
    middle_name: str | None = None
    last_name: str
    suffix: str | None = None
    email: str
    tel_no: str | None = None
    address: str | None = None
    role: FacultyRole
    username: str | None = None
    dept_code: str | None = None
    department_name: str | None = None
    created_at: datetime
    updated_at: datetime


class ProfileUpdateRequest(BaseModel):
    """Request schema for editing personal details.

    Blank first or last names are ignored. A blank middle name, telephone
    or address clears the field. The suffix is always replaced.
    """

    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    suffix: str | None = None
    tel_no: str | None = Field(None, description="Telephone number")
    address: str | None = None


class PasswordChangeRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., description="At least 6 characters")


class EmailChangeRequest(BaseModel):
    new_email: str
    password: str = Field(..., description="Current password for confirmation")
