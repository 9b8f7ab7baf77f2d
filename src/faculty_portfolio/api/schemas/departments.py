"""Pydantic schemas for department endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from faculty_portfolio.constants import FacultyRole


class DepartmentResponse(BaseModel):
    """Response schema for department data."""

    dept_code: str
    dept_name: str
    office_location: str | None = None
    description: str | None = None
    chairperson_id: int | None = None
    chairperson_name: str | None = None
    member_count: int = 0
    created_at: datetime


class DepartmentCreateRequest(BaseModel):
    """Request schema for creating a department."""

    dept_code: str = Field(..., max_length=10, description="Short unique code (e.g. CS)")
    dept_name: str = Field(..., description="Department name")
    office_location: str | None = None
    description: str | None = None


class DepartmentUpdateRequest(BaseModel):
    """Request schema for updating a department.

    All fields are optional; only provided fields are updated.
    """

    dept_name: str | None = None
    office_location: str | None = None
    description: str | None = None


class FacultyAssignRequest(BaseModel):
    faculty_id: int = Field(..., description="Faculty member to assign")


class MemberResponse(BaseModel):
    """A department member with display helpers."""

    id: int
    first_name: str
    middle_name: str | None = None
    last_name: str
    suffix: str | None = None
    full_name: str
    email: str
    tel_no: str | None = None
    address: str | None = None
    role: FacultyRole
    avatar_initial: str
    avatar_color: str
    dept_code: str | None = None


class DepartmentStatsResponse(BaseModel):
    total_faculty: int
    regular_faculty: int
    dept_heads: int
    deans: int
    has_chairperson: bool
    chairperson_name: str | None = None


class LeadershipResponse(BaseModel):
    dean: MemberResponse | None = None
    dept_head: MemberResponse | None = None
    chairperson: MemberResponse | None = None


class DepartmentOverviewResponse(BaseModel):
    """A department with its leadership, members and stats."""

    department: DepartmentResponse
    leadership: LeadershipResponse
    members: list[MemberResponse]
    stats: DepartmentStatsResponse
